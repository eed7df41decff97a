import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from resume_builder.app.editor.notifications import Notifier

log = logging.getLogger(__name__)

SAVE_SUCCESS_MESSAGE = "Resume saved successfully!"
SAVE_FAILURE_MESSAGE = "Failed to save resume"

SaveFunction = Callable[[str], Awaitable[str]]


class SaveInProgressError(Exception):
    """Raised when a save is requested while another one is still running."""


@dataclass(frozen=True)
class SaveResult:
    """Outcome of one save attempt."""

    success: bool
    error: str | None = None
    saved_content: str | None = None


class PersistenceBridge:
    """
    Sends the markdown snapshot to the save collaborator.

    At most one save is in flight at a time. Every finished save produces
    exactly one notification.

    Attributes:
        is_saving (bool): True while a save is in flight.
    """

    def __init__(self, save: SaveFunction, notifier: Notifier):
        """
        Args:
            save (SaveFunction): Coroutine function storing the content and returning it as saved.
            notifier (Notifier): Receives the success or failure notification.
        """
        self._save = save
        self._notifier = notifier
        self.is_saving = False

    async def submit(self, content: str) -> SaveResult:
        """
        Save a markdown snapshot.

        Args:
            content (str): The document to save, unmodified.

        Returns:
            SaveResult: The outcome. A failed save leaves `content` untouched.

        Raises:
            SaveInProgressError: If a save is already in flight. No save call is made.

        Notes:
            1. Reject the request if a save is in flight.
            2. Mark the bridge busy and await the save collaborator.
            3. Turn a collaborator failure into an unsuccessful result.
            4. Clear the busy flag in every case.
            5. Report the result through the notifier.

        """
        if self.is_saving:
            _msg = "Save requested while another save is in flight"
            log.warning(_msg)
            raise SaveInProgressError("A save is already in progress")

        self.is_saving = True
        try:
            saved_content = await self._save(content)
            result = SaveResult(success=True, saved_content=saved_content)
        except Exception as e:
            _msg = f"Failed to save resume: {e}"
            log.exception(_msg)
            result = SaveResult(success=False, error=str(e) or None)
        finally:
            self.is_saving = False

        self._report(result)
        return result

    def _report(self, result: SaveResult) -> None:
        if result.success:
            self._notifier.success(SAVE_SUCCESS_MESSAGE)
        else:
            self._notifier.error(result.error or SAVE_FAILURE_MESSAGE)
