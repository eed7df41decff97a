import logging

from pydantic import ValidationError

from resume_builder.app.models.resume.schema import ResumeSchema
from resume_builder.app.models.resume.sections import ResumeSections

log = logging.getLogger(__name__)


def _format_location(loc: tuple) -> str:
    """Join a pydantic error location into a dotted field path."""
    return ".".join(str(part) for part in loc)


def validate_resume_sections(sections: ResumeSections) -> dict[str, str]:
    """Validate structured resume data against the submission schema.

    Args:
        sections (ResumeSections): The structured form data to validate.

    Returns:
        dict[str, str]: A mapping of dotted camelCase field paths
            (e.g. "contactInfo.email", "experience.0.endDate") to error
            messages. Empty when the data is valid.

    Notes:
        1. Dump the form data using its wire (camelCase) names.
        2. Validate the dump with `ResumeSchema`.
        3. Flatten each validation error into one field path and message.
        4. When two errors hit the same field, the first one wins.

    """
    _msg = "validate_resume_sections starting"
    log.debug(_msg)

    payload = sections.model_dump(by_alias=True)
    errors: dict[str, str] = {}
    try:
        ResumeSchema.model_validate(payload)
    except ValidationError as e:
        for error in e.errors():
            errors.setdefault(_format_location(error["loc"]), error["msg"])

    _msg = f"validate_resume_sections returning {len(errors)} errors"
    log.debug(_msg)
    return errors
