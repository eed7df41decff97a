import asyncio
import logging
from dataclasses import dataclass

from resume_builder.app.editor.notifications import Notifier
from resume_builder.app.export.renderer import PrintableDocument, Renderer
from resume_builder.app.export.surfaces import PresentationSurface, SurfaceFactory

log = logging.getLogger(__name__)

CONTENT_NOT_FOUND_MESSAGE = (
    "Resume content not found. Please make sure you're on the preview tab."
)
POPUP_BLOCKED_MESSAGE = "Pop-up blocked. Please allow pop-ups and try again."
SURFACE_CLOSED_MESSAGE = "Print window was closed before printing."
GENERIC_FAILURE_MESSAGE = "Failed to generate PDF. Please try again."
PRINT_OPENED_MESSAGE = (
    "Print dialog opened. Choose 'Save as PDF' in your printer options."
)


class ExportError(Exception):
    """An expected export failure whose message is shown to the user."""


class ResumeContentNotFoundError(ExportError):
    def __init__(self):
        super().__init__(CONTENT_NOT_FOUND_MESSAGE)


class PopupBlockedError(ExportError):
    def __init__(self):
        super().__init__(POPUP_BLOCKED_MESSAGE)


class SurfaceClosedError(ExportError):
    def __init__(self):
        super().__init__(SURFACE_CLOSED_MESSAGE)


class ExportInProgressError(Exception):
    """Raised when an export is requested while another one is running."""


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one export attempt."""

    success: bool
    error: str | None = None
    document: PrintableDocument | None = None


class ExportPipeline:
    """
    Turns the markdown preview into a printed document on a presentation surface.

    Attributes:
        is_generating (bool): True while an export runs. Reset on every exit path.
    """

    def __init__(
        self,
        renderer: Renderer,
        surface_factory: SurfaceFactory,
        notifier: Notifier,
        print_delay: float = 0.5,
        fallback_delay: float = 1.0,
        close_delay: float = 0.1,
    ):
        """
        Args:
            renderer (Renderer): Produces the printable document.
            surface_factory (SurfaceFactory): Opens a surface, or returns None if blocked.
            notifier (Notifier): Receives the outcome notification.
            print_delay (float): Seconds between the load signal and printing.
            fallback_delay (float): Seconds after which printing starts without a load signal.
            close_delay (float): Seconds between printing and closing the surface.
        """
        self._renderer = renderer
        self._surface_factory = surface_factory
        self._notifier = notifier
        self.print_delay = print_delay
        self.fallback_delay = fallback_delay
        self.close_delay = close_delay
        self.is_generating = False

    async def generate(self, markdown_content: str | None) -> ExportResult:
        """
        Export a markdown document through a print surface.

        Args:
            markdown_content (str | None): The document shown in the preview.

        Returns:
            ExportResult: The outcome, with the printable document on success.

        Raises:
            ExportInProgressError: If another export is running.

        Notes:
            1. Reject a concurrent export.
            2. Fail with "content not found" for a missing or blank document.
            3. Render the document; an empty render is also "content not found".
            4. Open a surface; a refused surface fails with "pop-up blocked".
            5. Write the page, wait for load or the fallback timer, print, then close.
            6. Known failures are reported with their message, anything else generically.
            7. `is_generating` is reset in every case so the export can be retried.

        """
        if self.is_generating:
            raise ExportInProgressError("An export is already in progress")

        _msg = "ExportPipeline.generate starting"
        log.debug(_msg)
        self.is_generating = True
        try:
            if not markdown_content or not markdown_content.strip():
                raise ResumeContentNotFoundError()
            document = self._renderer.render(markdown_content)
            if not document.body.strip():
                raise ResumeContentNotFoundError()

            surface = self._surface_factory()
            if surface is None:
                raise PopupBlockedError()
            surface.write(document.html)
            await self._print_when_ready(surface)
        except ExportError as e:
            _msg = f"Export failed: {e}"
            log.warning(_msg)
            self._notifier.error(str(e))
            return ExportResult(success=False, error=str(e))
        except Exception as e:
            _msg = f"PDF generation error: {e}"
            log.exception(_msg)
            self._notifier.error(GENERIC_FAILURE_MESSAGE)
            return ExportResult(success=False, error=GENERIC_FAILURE_MESSAGE)
        finally:
            self.is_generating = False

        self._notifier.success(PRINT_OPENED_MESSAGE)
        _msg = "ExportPipeline.generate returning"
        log.debug(_msg)
        return ExportResult(success=True, document=document)

    async def _print_after_load(self, surface: PresentationSurface) -> None:
        await surface.wait_until_loaded()
        await asyncio.sleep(self.print_delay)

    async def _print_when_ready(self, surface: PresentationSurface) -> None:
        """
        Print once the surface is ready, then close it.

        Notes:
            1. Race the load signal (plus the print delay) against the fallback timer.
            2. Cancel whichever side lost; a failed load signal propagates.
            3. A surface the user already closed cannot be printed.
            4. Print, wait the close delay, then close the surface.

        """
        load_task = asyncio.ensure_future(self._print_after_load(surface))
        fallback_task = asyncio.ensure_future(asyncio.sleep(self.fallback_delay))
        try:
            done, _ = await asyncio.wait(
                {load_task, fallback_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for task in (load_task, fallback_task):
                if not task.done():
                    task.cancel()

        if load_task in done:
            load_task.result()
        else:
            _msg = "Load signal did not fire; printing from the fallback timer"
            log.info(_msg)

        if surface.closed:
            raise SurfaceClosedError()

        surface.print()
        await asyncio.sleep(self.close_delay)
        surface.close()
