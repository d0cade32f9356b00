"""Markdown parsing: heading detection and section extraction."""

import logging
import re
from dataclasses import dataclass, field

from ..errors import StructuralError

logger = logging.getLogger(__name__)

# ATX (`## Title`) first, Setext (`Title` over `====` / `----`) second.
# Horizontal whitespace only, so an empty `#` line never swallows the next line.
# A `\r` before the line break is tolerated; heading text is trimmed of it.
HEADING_PATTERN = re.compile(
    r'^(#+)[ \t]*(.*)$'
    r'|^([^\n]*\S[^\n]*)\n(=+|-+)[ \t]*\r?$',
    re.MULTILINE,
)

# Opening `---` line, block, closing `---` line
FRONT_MATTER_PATTERN = re.compile(r'---[ \t]*\n(.*?)\n---[ \t]*(?:\n|$)', re.DOTALL)

# `key: value`, a `- item` of a list, or an indented continuation
YAML_LINE_PATTERN = re.compile(r'^(?:[\w.-]+[ \t]*:(?:[ \t].*)?|[ \t]*-[ \t].*|[ \t]+\S.*)$')

# Absorbed subsections are always re-rendered with a level-2 marker,
# whatever their real level.
SUBSECTION_MARKER = '##'


@dataclass(frozen=True)
class Heading:
    """A heading occurrence found by the scanner."""
    level: int
    text: str
    start_offset: int
    end_offset: int


@dataclass(frozen=True)
class Section:
    """A heading and the body text that belongs to it."""
    level: int
    heading: str
    body: str
    start_offset: int = field(default=0, compare=False)

    def to_dict(self) -> dict:
        return {"level": self.level, "heading": self.heading, "body": self.body}


def slugify(text: str) -> str:
    """Convert text to a URL-friendly slug."""
    text = text.lower().strip()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[-\s]+', '-', text)
    return text


def format_text(text: str) -> str:
    """Collapse runs of three or more newlines to a paragraph break and trim."""
    return re.sub(r'\n{3,}', '\n\n', text).strip()


def render_subsection(heading: str, body: str) -> str:
    """Render a subsection as a blank-line separated block for a parent body."""
    return f"\n\n{SUBSECTION_MARKER} {heading}\n\n{body}"


def strip_front_matter(content: str) -> tuple[str, dict]:
    """
    Strip YAML front-matter from content.

    Returns:
        Tuple of (content without front-matter, extracted metadata dict)
    """
    metadata: dict = {}
    match = FRONT_MATTER_PATTERN.match(content)
    if not match:
        return content, metadata

    front_matter = match.group(1)
    lines = [line for line in front_matter.split('\n') if line.strip()]
    # A leading horizontal rule is not front matter
    if not lines or not all(YAML_LINE_PATTERN.match(line) for line in lines):
        return content, metadata

    rest = content[match.end():]

    title_match = re.search(r'^title:\s*["\']?(.+?)["\']?\s*$', front_matter, re.MULTILINE)
    if title_match:
        metadata['title'] = title_match.group(1).strip()

    return rest, metadata


def _heading_level(match: re.Match) -> int:
    """Determine the heading level from a pattern match (h1, h2, etc.)."""
    if match.group(1):
        return len(match.group(1))
    underline = match.group(4)
    if underline:
        return 1 if underline[0] == '=' else 2
    raise StructuralError(f"Could not determine heading level at offset {match.start()}")


def scan_headings(text: str) -> list[Heading]:
    """
    Find every ATX and Setext heading in the text, in document order.

    Matches never overlap. For Setext headings the heading text is the line
    above the underline, and `end_offset` points just past the underline.
    """
    headings: list[Heading] = []
    for match in HEADING_PATTERN.finditer(text):
        heading_text = match.group(2) if match.group(1) else match.group(3)
        headings.append(Heading(
            level=_heading_level(match),
            text=heading_text.strip(),
            start_offset=match.start(),
            end_offset=match.end(),
        ))

    logger.debug("Scanned %d headings", len(headings))
    return headings


def _own_body(text: str, headings: list[Heading], index: int) -> str:
    """Text strictly between a heading and the next heading at any level."""
    body_end = headings[index + 1].start_offset if index + 1 < len(headings) else len(text)
    return text[headings[index].end_offset:body_end].strip()


def build_sections(text: str, headings: list[Heading], absorb: bool = True) -> list[Section]:
    """
    Build the ordered section list for a document.

    Each section's body is its own text up to the next heading. With
    `absorb`, every immediately following deeper heading is appended to
    the body as a `## heading` block with its own text, stopping at the
    first heading at the same or a shallower level. Absorbed sections still
    appear as entries of their own, so the result is a flattening, not a
    tree.

    Args:
        text: The source text the headings were scanned from
        headings: Output of scan_headings(text)
        absorb: Fold deeper subsections into parent bodies

    Returns:
        List of sections in document order
    """
    own_bodies = [_own_body(text, headings, i) for i in range(len(headings))]
    sections: list[Section] = []

    for i, heading in enumerate(headings):
        body = own_bodies[i]

        if absorb:
            k = i + 1
            while k < len(headings) and headings[k].level > heading.level:
                body += render_subsection(headings[k].text, own_bodies[k])
                k += 1

        sections.append(Section(
            level=heading.level,
            heading=heading.text,
            body=body.strip(),
            start_offset=heading.start_offset,
        ))

    return sections


def parse_markdown_to_sections(content: str, absorb: bool = True) -> list[Section]:
    """Scan and build sections in one step, with line endings normalized to \\n."""
    content = content.replace('\r\n', '\n')
    return build_sections(content, scan_headings(content), absorb=absorb)
