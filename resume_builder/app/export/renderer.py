import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import markdown
from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader

log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
env = Environment(loader=FileSystemLoader(str(TEMPLATES_DIR)), autoescape=True)

PRINT_TEMPLATE = "print_resume.html"
MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]
STRIPPED_ATTRIBUTES = ("style", "class")
DROPPED_TAGS = ("script", "style", "iframe", "object", "embed", "svg", "math", "form")
URL_ATTRIBUTES = ("href", "src", "action", "formaction", "poster")
SAFE_URL_SCHEMES = ("http", "https", "mailto")


@dataclass(frozen=True)
class PrintableDocument:
    """A self-contained page ready to be printed.

    Attributes:
        html (str): The full HTML page, print stylesheet included.
        body (str): The sanitized resume markup embedded in the page.
        title (str): The page title.
    """

    html: str
    body: str
    title: str = "Resume"


class Renderer(Protocol):
    """Turns a markdown document into a printable document."""

    def render(self, markdown_content: str) -> PrintableDocument: ...


def markdown_to_html(markdown_content: str) -> str:
    """Render markdown, raw HTML blocks included, into HTML markup."""
    return markdown.markdown(markdown_content, extensions=MARKDOWN_EXTENSIONS)


def _is_safe_url(value: str) -> bool:
    """Allow relative URLs and the http, https and mailto schemes."""
    # Browsers ignore control characters and whitespace inside the scheme.
    compact = "".join(ch for ch in value if ch.isprintable() and not ch.isspace())
    scheme, separator, _ = compact.partition(":")
    if not separator or "/" in scheme or "?" in scheme or "#" in scheme:
        return True
    return scheme.lower() in SAFE_URL_SCHEMES


def sanitize_markup(markup: str) -> str:
    """Strip presentation attributes and active content from rendered markup.

    Args:
        markup (str): HTML produced by the markdown renderer.

    Returns:
        str: The markup without inline `style`/`class` attributes, event
            handler attributes, script-like elements and links whose scheme
            is not http, https or mailto. Only the print stylesheet applies.

    """
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup.find_all(DROPPED_TAGS):
        tag.decompose()
    for tag in soup.find_all(True):
        for attribute in list(tag.attrs):
            if attribute in STRIPPED_ATTRIBUTES or attribute.lower().startswith("on"):
                del tag[attribute]
            elif attribute in URL_ATTRIBUTES and not _is_safe_url(tag[attribute]):
                del tag[attribute]
    return str(soup).strip()


class HtmlPrintRenderer:
    """
    Renders markdown into an HTML page wrapped in the fixed print stylesheet.

    Attributes:
        auto_print (bool): Whether the page prints itself once loaded.
        print_delay_ms (int): Page-side delay between load and print.
        fallback_ms (int): Page-side fallback print timer.
        close_delay_ms (int): Page-side delay between print and close.
    """

    def __init__(
        self,
        auto_print: bool = True,
        print_delay_ms: int = 500,
        fallback_ms: int = 1000,
        close_delay_ms: int = 100,
        title: str = "Resume",
    ):
        self.auto_print = auto_print
        self.print_delay_ms = print_delay_ms
        self.fallback_ms = fallback_ms
        self.close_delay_ms = close_delay_ms
        self.title = title

    def render(self, markdown_content: str) -> PrintableDocument:
        """
        Render markdown into a printable page.

        Args:
            markdown_content (str): The resume document.

        Returns:
            PrintableDocument: The page and the sanitized body it embeds.

        Notes:
            1. Render the markdown into markup.
            2. Sanitize the markup.
            3. Wrap it into the print template.

        """
        _msg = "HtmlPrintRenderer.render starting"
        log.debug(_msg)

        body = sanitize_markup(markdown_to_html(markdown_content))
        template = env.get_template(PRINT_TEMPLATE)
        page = template.render(
            title=self.title,
            body=body,
            auto_print=self.auto_print,
            print_delay_ms=self.print_delay_ms,
            fallback_ms=self.fallback_ms,
            close_delay_ms=self.close_delay_ms,
        )

        _msg = "HtmlPrintRenderer.render returning"
        log.debug(_msg)
        return PrintableDocument(html=page, body=body, title=self.title)
