import logging
from urllib.parse import urlparse

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

log = logging.getLogger(__name__)

REQUIRED_ENTRY_MESSAGES = {
    "title": "Title is required",
    "organization": "Organization is required",
    "start_date": "Start date is required",
}
END_DATE_REQUIRED_MESSAGE = "End date is required unless this is your current position"
INVALID_URL_MESSAGE = "Invalid URL"


class SchemaModel(BaseModel):
    """Base for the submission schema; mirrors the camelCase wire names of the form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactInfoSchema(SchemaModel):
    """
    Validation rules for contact details.

    All fields are optional; blank values count as absent. Present values
    must be well formed.

    Attributes:
        email (EmailStr | None): Must be a valid e-mail address.
        mobile (str | None): Free text.
        linkedin (str | None): Must be an http(s) URL.
        twitter (str | None): Must be an http(s) URL.
    """

    email: EmailStr | None = None
    mobile: str | None = None
    linkedin: str | None = None
    twitter: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Blank strings are treated as missing values."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("linkedin", "twitter")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """
        Validate a profile URL.

        Args:
            v (str | None): The URL to validate.

        Returns:
            str | None: The unchanged URL.

        Raises:
            PydanticCustomError: If the value is not an absolute http(s) URL.

        """
        if v is None:
            return v
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise PydanticCustomError("url", INVALID_URL_MESSAGE)
        return v


class EntrySchema(SchemaModel):
    """
    Validation rules for one experience, education or project entry.

    Attributes:
        title (str | None): Required.
        organization (str | None): Required.
        start_date (str | None): Required.
        current (bool): Whether the entry is ongoing.
        end_date (str | None): Required unless `current` is set; ignored when it is.
        description (str | None): Optional body text.
    """

    title: str | None = Field(default=None, validate_default=True)
    organization: str | None = Field(default=None, validate_default=True)
    start_date: str | None = Field(default=None, validate_default=True)
    # `current` must be declared before `end_date` so its value is visible below.
    current: bool = False
    end_date: str | None = Field(default=None, validate_default=True)
    description: str | None = None

    @field_validator("title", "organization", "start_date")
    @classmethod
    def require_text(cls, v: str | None, info: ValidationInfo) -> str:
        """Reject missing or blank required fields with a field-specific message."""
        if v is None or not v.strip():
            raise PydanticCustomError(
                "missing_value",
                REQUIRED_ENTRY_MESSAGES[info.field_name],
            )
        return v

    @field_validator("end_date")
    @classmethod
    def require_end_date_unless_current(
        cls,
        v: str | None,
        info: ValidationInfo,
    ) -> str | None:
        """
        Enforce the end date rule.

        Args:
            v (str | None): The submitted end date.
            info (ValidationInfo): Holds the already-validated `current` flag.

        Returns:
            str | None: None for a current entry, otherwise the end date.

        Raises:
            PydanticCustomError: If the entry is not current and has no end date.

        """
        if info.data.get("current"):
            return None
        if v is None or not v.strip():
            raise PydanticCustomError("end_date_required", END_DATE_REQUIRED_MESSAGE)
        return v


class ResumeSchema(SchemaModel):
    """
    Validation rules for a full resume submission.

    Attributes:
        contact_info (ContactInfoSchema): Contact details.
        summary (str | None): Professional summary.
        skills (str | None): Skills text.
        experience (list[EntrySchema]): Work experience entries.
        education (list[EntrySchema]): Education entries.
        projects (list[EntrySchema]): Project entries.
    """

    contact_info: ContactInfoSchema = Field(default_factory=ContactInfoSchema)
    summary: str | None = None
    skills: str | None = None
    experience: list[EntrySchema] = Field(default_factory=list)
    education: list[EntrySchema] = Field(default_factory=list)
    projects: list[EntrySchema] = Field(default_factory=list)
