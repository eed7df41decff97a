import logging
from datetime import datetime

from pydantic import BaseModel

from resume_builder.app.editor.notifications import Notification, NotificationLevel
from resume_builder.app.editor.synchronizer import (
    ActiveView,
    PreviewMode,
    ResumeSynchronizer,
    SyncMode,
)
from resume_builder.app.models.resume.sections import ResumeSections

log = logging.getLogger(__name__)


class ResumeContentResponse(BaseModel):
    """Response model for the saved resume.

    Attributes:
        content (str): The saved markdown, empty if nothing was saved yet.
        updated_at (datetime | None): When the resume was last saved.

    """

    content: str
    updated_at: datetime | None = None


class SaveRequest(BaseModel):
    """Request model for saving markdown directly.

    Attributes:
        content (str): The markdown to store, unmodified.

    """

    content: str


class SaveResponse(BaseModel):
    """Response model for a save.

    Attributes:
        success (bool): Whether the content was stored.
        error (str | None): The failure message, if any.
        saved_content (str | None): The content as stored.

    """

    success: bool
    error: str | None = None
    saved_content: str | None = None


class ComposeResponse(BaseModel):
    """Response model for markdown composition."""

    markdown: str


class ValidationResponse(BaseModel):
    """Response model for form validation.

    Attributes:
        valid (bool): True when there are no errors.
        errors (dict[str, str]): Dotted field path to error message.

    """

    valid: bool
    errors: dict[str, str]


class MarkdownEditRequest(BaseModel):
    """Request model for a direct markdown edit."""

    markdown: str


class ViewChangeRequest(BaseModel):
    """Request model for switching editor tabs."""

    view: ActiveView


class PreviewModeRequest(BaseModel):
    """Request model for switching between rendered preview and raw editor."""

    mode: PreviewMode


class NotificationResponse(BaseModel):
    """A toast-level message for the user."""

    level: NotificationLevel
    message: str

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationResponse":
        return cls(level=notification.level, message=notification.message)


class EditorStateResponse(BaseModel):
    """Response model describing the editor after an operation.

    Attributes:
        markdown (str): The document shown in the preview.
        sections (ResumeSections): The latest structured form data.
        active_view (ActiveView): The active tab.
        preview_mode (PreviewMode): Rendered preview or raw markdown editor.
        sync_mode (SyncMode): Whether the document mirrors the form.
        warning (str | None): The overwrite warning while the raw editor is open.
        is_saving (bool): Whether a save is in flight.
        is_generating (bool): Whether an export is running.
        notifications (list[NotificationResponse]): Messages produced since the last response.

    """

    markdown: str
    sections: ResumeSections
    active_view: ActiveView
    preview_mode: PreviewMode
    sync_mode: SyncMode
    warning: str | None = None
    is_saving: bool = False
    is_generating: bool = False
    notifications: list[NotificationResponse] = []

    @classmethod
    def from_state(
        cls,
        synchronizer: ResumeSynchronizer,
        notifications: list[Notification],
        is_saving: bool = False,
        is_generating: bool = False,
    ) -> "EditorStateResponse":
        return cls(
            markdown=synchronizer.markdown,
            sections=synchronizer.sections,
            active_view=synchronizer.active_view,
            preview_mode=synchronizer.preview_mode,
            sync_mode=synchronizer.sync_mode,
            warning=synchronizer.warning,
            is_saving=is_saving,
            is_generating=is_generating,
            notifications=[
                NotificationResponse.from_notification(n) for n in notifications
            ],
        )


class SubmitResponse(BaseModel):
    """Response model for an editor submit."""

    result: SaveResponse
    state: EditorStateResponse
