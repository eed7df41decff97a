"""Keeps the structured resume form and the markdown preview consistent.

The markdown document is derived from the form in one direction only; there
is no parser from markdown back to form fields. Once the user edits the
markdown directly the document is marked MANUAL and becomes the source of
truth until the next regeneration.
"""

import logging
from collections.abc import Callable
from enum import Enum

from resume_builder.app.api.routes.route_logic.markdown_composer import (
    compose_resume_markdown,
)
from resume_builder.app.models.resume.sections import ResumeSections

log = logging.getLogger(__name__)

MANUAL_EDIT_WARNING = "You will lose edited markdown if you update the form data."

Composer = Callable[[ResumeSections, str | None], str]


class ActiveView(str, Enum):
    """The editor tab currently shown."""

    FORM = "edit"
    MARKDOWN = "preview"


class PreviewMode(str, Enum):
    """Whether the markdown tab shows the rendered preview or the raw editor."""

    PREVIEW = "preview"
    EDIT = "edit"


class SyncMode(str, Enum):
    """Whether the markdown document currently mirrors the form."""

    AUTO = "auto"
    MANUAL = "manual"


class ResumeSynchronizer:
    """
    State of one resume editor: form data, markdown document and view modes.

    Attributes:
        sections (ResumeSections): The latest structured form data.
        markdown (str): The document shown in the preview and sent on submit.
        active_view (ActiveView): The active tab.
        preview_mode (PreviewMode): Rendered preview or raw markdown editor.
        sync_mode (SyncMode): AUTO while the document mirrors the form, MANUAL after a direct edit.
        display_name (str | None): Name used for the contact heading.
        overwrite_manual_edits (bool): If True, a form change on the FORM tab
            regenerates the document even in MANUAL mode, discarding the manual edits.
    """

    def __init__(
        self,
        initial_content: str = "",
        display_name: str | None = None,
        overwrite_manual_edits: bool = True,
        composer: Composer = compose_resume_markdown,
    ):
        """
        Initialize the editor state.

        Args:
            initial_content (str): Previously saved markdown, or an empty string.
            display_name (str | None): Name used for the contact heading.
            overwrite_manual_edits (bool): The regeneration policy for MANUAL documents.
            composer (Composer): Function turning form data into markdown.

        Notes:
            1. The form starts empty; saved markdown is never parsed back into it.
            2. The preview starts with the saved markdown.
            3. With saved markdown the markdown tab is active, otherwise the form tab.

        """
        self.initial_content = initial_content or ""
        self.display_name = display_name
        self.overwrite_manual_edits = overwrite_manual_edits
        self._composer = composer

        self.sections = ResumeSections()
        self.markdown = self.initial_content
        self.sync_mode = SyncMode.AUTO
        self.preview_mode = PreviewMode.PREVIEW
        self.active_view = (
            ActiveView.MARKDOWN if self.initial_content else ActiveView.FORM
        )

    @property
    def warning(self) -> str | None:
        """The overwrite warning, shown while the raw markdown editor is open."""
        if (
            self.active_view is ActiveView.MARKDOWN
            and self.preview_mode is PreviewMode.EDIT
        ):
            return MANUAL_EDIT_WARNING
        return None

    def regenerate(self) -> str:
        """Compose markdown from the current form data.

        Returns:
            str: The composed document, or the initial content if the form
                produces nothing.

        """
        content = self._composer(self.sections, self.display_name)
        return content or self.initial_content

    def update_sections(self, sections: ResumeSections) -> bool:
        """
        Apply a structured form change.

        Args:
            sections (ResumeSections): The new form data.

        Returns:
            bool: True if the markdown document was regenerated.

        Notes:
            1. Store the new form data.
            2. Regenerate only while the FORM tab is active.
            3. A MANUAL document is overwritten only when `overwrite_manual_edits` is set.
            4. After a regeneration the document is AUTO again.

        """
        self.sections = sections
        if self.active_view is not ActiveView.FORM:
            _msg = "Form change outside the form tab; document left unchanged"
            log.debug(_msg)
            return False
        if self.sync_mode is SyncMode.MANUAL and not self.overwrite_manual_edits:
            _msg = "Form change ignored; keeping manually edited document"
            log.debug(_msg)
            return False
        if self.sync_mode is SyncMode.MANUAL:
            _msg = "Form change discards manually edited document"
            log.info(_msg)

        self.markdown = self.regenerate()
        self.sync_mode = SyncMode.AUTO
        return True

    def edit_markdown(self, content: str) -> None:
        """Replace the document with a direct edit and switch to MANUAL."""
        self.markdown = content
        self.sync_mode = SyncMode.MANUAL

    def resync(self) -> None:
        """Explicitly rebuild the document from the form and return to AUTO."""
        self.markdown = self.regenerate()
        self.sync_mode = SyncMode.AUTO

    def switch_view(self, view: ActiveView) -> None:
        """Change tabs. Switching never regenerates or discards the document."""
        self.active_view = view

    def set_preview_mode(self, mode: PreviewMode) -> None:
        self.preview_mode = mode

    def toggle_preview_mode(self) -> PreviewMode:
        """Flip between the rendered preview and the raw markdown editor."""
        self.preview_mode = (
            PreviewMode.EDIT
            if self.preview_mode is PreviewMode.PREVIEW
            else PreviewMode.PREVIEW
        )
        return self.preview_mode

    def snapshot(self) -> str:
        """Return the document as currently shown; this is what gets saved."""
        return self.markdown
