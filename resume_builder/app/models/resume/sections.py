import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

log = logging.getLogger(__name__)


class FormModel(BaseModel):
    """Base for form models.

    Fields are snake_case in Python and camelCase on the wire; both spellings
    are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def none_to_empty_string(cls, v, info):
        """Treat a missing text value as empty and a missing flag as False."""
        if v is not None:
            return v
        annotation = cls.model_fields[info.field_name].annotation
        if annotation is str:
            return ""
        if annotation is bool:
            return False
        return v


class ContactInfo(FormModel):
    """
    Contact details shown under the resume heading.

    Attributes:
        email (str): E-mail address.
        mobile (str): Phone number, free text.
        linkedin (str): LinkedIn profile URL.
        twitter (str): Twitter/X profile URL.
    """

    email: str = ""
    mobile: str = ""
    linkedin: str = ""
    twitter: str = ""

    def is_empty(self) -> bool:
        """Return True when no contact method is set."""
        return not any(
            value.strip()
            for value in (self.email, self.mobile, self.linkedin, self.twitter)
        )


class Entry(FormModel):
    """
    One experience, education or project item.

    Attributes:
        title (str): Role, degree or project title.
        organization (str): Company, school or project owner.
        start_date (str): Start of the date range, as typed by the user.
        end_date (str): End of the date range. Always empty when `current` is set.
        current (bool): Whether the entry is ongoing.
        description (str): Free-text description body.
    """

    title: str = ""
    organization: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""

    @model_validator(mode="after")
    def clear_end_date_when_current(self) -> "Entry":
        """An ongoing entry has no end date."""
        if self.current and self.end_date:
            _msg = f"Clearing end date for current entry: {self.title}"
            log.debug(_msg)
            self.end_date = ""
        return self


class ResumeSections(FormModel):
    """
    The full structured resume form.

    Every field is optional. Format rules are enforced separately by
    `resume_builder.app.models.resume.schema` when the form is submitted.

    Attributes:
        contact_info (ContactInfo): Contact details.
        summary (str): Professional summary text.
        skills (str): Skills text.
        experience (list[Entry]): Work experience entries, in display order.
        education (list[Entry]): Education entries, in display order.
        projects (list[Entry]): Project entries, in display order.
    """

    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    summary: str = ""
    skills: str = ""
    experience: list[Entry] = Field(default_factory=list)
    education: list[Entry] = Field(default_factory=list)
    projects: list[Entry] = Field(default_factory=list)

    @field_validator("contact_info", mode="before")
    @classmethod
    def none_to_empty_contact(cls, v):
        """A missing contact block is an empty one."""
        return {} if v is None else v

    @field_validator("experience", "education", "projects", mode="before")
    @classmethod
    def none_to_empty_list(cls, v):
        """A missing entry list is an empty one."""
        return [] if v is None else v
