import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

log = logging.getLogger(__name__)


class PresentationSurface(Protocol):
    """An isolated surface a printable page is shown on, such as a browser window."""

    closed: bool

    def write(self, html: str) -> None: ...

    async def wait_until_loaded(self) -> None: ...

    def print(self) -> None: ...

    def close(self) -> None: ...


# Returns None when the platform refuses to open a surface (e.g. a blocked pop-up).
SurfaceFactory = Callable[[], PresentationSurface | None]


class CapturedSurface:
    """
    In-memory surface that keeps the page for delivery to an HTTP client.

    The page finishes loading as soon as it is written. Printing only
    records the request; the delivered page prints itself client-side.

    Attributes:
        html (str | None): The written page.
        print_requested (bool): Whether the pipeline triggered printing.
        closed (bool): Whether the surface was closed.
    """

    def __init__(self):
        self.html: str | None = None
        self.print_requested = False
        self.closed = False
        self._loaded = asyncio.Event()

    def write(self, html: str) -> None:
        self.html = html
        self._loaded.set()

    async def wait_until_loaded(self) -> None:
        await self._loaded.wait()

    def print(self) -> None:
        _msg = "Print requested on captured surface"
        log.debug(_msg)
        self.print_requested = True

    def close(self) -> None:
        self.closed = True
