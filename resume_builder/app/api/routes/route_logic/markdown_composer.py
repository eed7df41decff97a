import html
import logging

from resume_builder.app.models.resume.sections import ContactInfo, Entry, ResumeSections

log = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n"
CONTACT_SEPARATOR = " | "
PRESENT_MARKER = "Present"

SUMMARY_TITLE = "Professional Summary"
SKILLS_TITLE = "Skills"
EXPERIENCE_TITLE = "Work Experience"
EDUCATION_TITLE = "Education"
PROJECTS_TITLE = "Projects"


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def _text_or_empty(value: str | None) -> str:
    # Blank values count as missing; anything else is emitted as typed.
    return value if _has_text(value) else ""


def contact_to_markdown(contact_info: ContactInfo, display_name: str | None) -> str:
    """Render the centered name heading and the contact line.

    Args:
        contact_info (ContactInfo): The contact details.
        display_name (str | None): The user's display name, if known.

    Returns:
        str: The contact block, or an empty string if there is neither a
            name nor any contact method.

    Notes:
        1. Collect present contact methods in fixed order: email, mobile, linkedin, twitter.
        2. LinkedIn and Twitter are rendered as markdown links.
        3. The heading is emitted only when a display name is known.
        4. The contact line is emitted only when at least one method is present.

    """
    parts = []
    if _has_text(contact_info.email):
        parts.append(f"📧 {contact_info.email}")
    if _has_text(contact_info.mobile):
        parts.append(f"📱 {contact_info.mobile}")
    if _has_text(contact_info.linkedin):
        parts.append(f"💼 [LinkedIn]({contact_info.linkedin})")
    if _has_text(contact_info.twitter):
        parts.append(f"🐦 [Twitter]({contact_info.twitter})")

    blocks = []
    if _has_text(display_name):
        name = html.escape(display_name, quote=False)
        blocks.append(f'## <div align="center">{name}</div>')
    if parts:
        # markdown="1" keeps the links live inside the raw HTML block.
        blocks.append(
            f'<div align="center" markdown="1">\n\n{CONTACT_SEPARATOR.join(parts)}\n\n</div>'
        )
    return SECTION_SEPARATOR.join(blocks)


def section_to_markdown(title: str, text: str | None) -> str:
    """Render a titled free-text section, or nothing when the text is blank."""
    if not _has_text(text):
        return ""
    return f"## {title}\n\n{text}"


def format_date_range(entry: Entry) -> str:
    """Format an entry's date range.

    Args:
        entry (Entry): The entry to format.

    Returns:
        str: "start - end", with "Present" as the end of a current entry.
            Missing halves are dropped rather than leaving a dangling dash.

    """
    end = PRESENT_MARKER if entry.current else _text_or_empty(entry.end_date)
    start = _text_or_empty(entry.start_date)
    if start and end:
        return f"{start} - {end}"
    return start or end


def entry_to_markdown(entry: Entry) -> str:
    """Render one entry as a `###` sub-block.

    Args:
        entry (Entry): The entry to render.

    Returns:
        str: Heading line ("title @ organization"), date line and
            description body, skipping whichever parts are empty.

    """
    parts = (entry.title, entry.organization)
    heading = " @ ".join(part for part in parts if _has_text(part))

    header_lines = []
    if heading:
        header_lines.append(f"### {heading}")
    date_range = format_date_range(entry)
    if date_range:
        header_lines.append(date_range)

    blocks = ["\n".join(header_lines), entry.description]
    return SECTION_SEPARATOR.join(block for block in blocks if _has_text(block))


def entries_to_markdown(entries: list[Entry], title: str) -> str:
    """Render a titled list of entries.

    Args:
        entries (list[Entry]): The entries, in display order.
        title (str): The section heading.

    Returns:
        str: The section, or an empty string for an empty list.

    """
    if not entries:
        return ""
    rendered = [entry_to_markdown(entry) for entry in entries]
    body = SECTION_SEPARATOR.join(block for block in rendered if block)
    if not body:
        return ""
    return f"## {title}{SECTION_SEPARATOR}{body}"


def compose_resume_markdown(sections: ResumeSections, display_name: str | None) -> str:
    """Compose the whole resume document from structured form data.

    The result depends only on the arguments, so equal inputs always produce
    byte-identical documents.

    Args:
        sections (ResumeSections): The structured form data.
        display_name (str | None): The user's display name, if known.

    Returns:
        str: The markdown document. Empty when every section is empty.

    Notes:
        1. Build fragments in fixed order: contact, summary, skills,
           experience, education, projects.
        2. Drop empty fragments.
        3. Join the rest with a blank line.

    """
    _msg = "compose_resume_markdown starting"
    log.debug(_msg)

    fragments = [
        contact_to_markdown(sections.contact_info, display_name),
        section_to_markdown(SUMMARY_TITLE, sections.summary),
        section_to_markdown(SKILLS_TITLE, sections.skills),
        entries_to_markdown(sections.experience, EXPERIENCE_TITLE),
        entries_to_markdown(sections.education, EDUCATION_TITLE),
        entries_to_markdown(sections.projects, PROJECTS_TITLE),
    ]
    document = SECTION_SEPARATOR.join(fragment for fragment in fragments if fragment)

    _msg = f"compose_resume_markdown returning {len(document)} characters"
    log.debug(_msg)
    return document
