"""A parsed Markdown document and the queries it answers on its own."""

import logging
from pathlib import Path
from typing import Optional, Union

from .changelog import updates_between_versions
from .errors import NotFoundError, StructuralError, ValidationError
from .parser.hierarchy import SectionNode, build_section_tree
from .parser.markdown import (
    Heading,
    Section,
    build_sections,
    format_text,
    scan_headings,
    strip_front_matter,
)
from .sources import read_markdown_file

logger = logging.getLogger(__name__)


class MarkdownDocument:
    """
    Sections of one Markdown text, computed once at construction.

    `sections` carries absorbed bodies (each parent body includes its
    deeper subsections); `flat_sections` carries each heading's own text
    only and is what keyword queries walk.
    """

    def __init__(self, text: str, source: str = "<string>", front_matter: bool = True):
        text = text.replace('\r\n', '\n')
        self.metadata: dict = {}
        if front_matter:
            text, self.metadata = strip_front_matter(text)

        self.text = text
        self.source = source
        self.headings: tuple[Heading, ...] = tuple(scan_headings(text))
        self.sections: tuple[Section, ...] = tuple(build_sections(text, list(self.headings)))
        self.flat_sections: tuple[Section, ...] = tuple(
            build_sections(text, list(self.headings), absorb=False)
        )
        logger.debug("Parsed %s: %d sections", source, len(self.sections))

    @classmethod
    def from_file(cls, path: Union[str, Path], base_path: Optional[Union[str, Path]] = None) -> "MarkdownDocument":
        """Read and parse a Markdown file."""
        return cls(read_markdown_file(path, base_path=base_path), source=str(path))

    @property
    def title(self) -> str:
        """Text of the first level-1 heading."""
        return self._title_section().heading

    def _title_section(self) -> Section:
        for section in self.sections:
            if section.level == 1:
                return section
        raise StructuralError("Title (h1) not found in the document.")

    def title_and_description(self) -> dict:
        """The h1 title and its formatted body."""
        section = self._title_section()
        return {"title": section.heading, "description": format_text(section.body)}

    def first_section(self) -> Section:
        """First section with only its own body text."""
        if not self.flat_sections:
            raise NotFoundError("Document has no headings.")
        return self.flat_sections[0]

    def count_headings_by_level(self) -> dict[int, int]:
        counts: dict[int, int] = {}
        for section in self.sections:
            counts[section.level] = counts.get(section.level, 0) + 1
        return counts

    def heading_levels(self, level: Optional[int] = None) -> Union[int, dict[int, int]]:
        """Number of headings at `level`, or the counts for every level."""
        counts = self.count_headings_by_level()
        if level:
            return counts.get(level, 0)
        return counts

    def sections_by_heading(self, keyword: str) -> list[Section]:
        """
        Get the sections whose heading contains `keyword` (case-insensitive).

        Raises:
            ValidationError: If keyword is empty or not a string
            NotFoundError: If no heading contains the keyword
        """
        if not isinstance(keyword, str) or not keyword.strip():
            raise ValidationError(f"Keyword must be a non-empty string, got: {keyword!r}")

        needle = keyword.lower()
        matches = [s for s in self.sections if needle in s.heading.lower()]
        if not matches:
            raise NotFoundError(f"No heading found with provided keyword: '{keyword}'")
        return matches

    def updates_between_versions(self, start_version: str, end_version: str) -> list[Section]:
        return updates_between_versions(self.sections, start_version, end_version)

    def outline(self) -> list[SectionNode]:
        return build_section_tree(list(self.sections))


def parse_markdown(text: str) -> list[Section]:
    """Parse Markdown text into its ordered sections."""
    return list(MarkdownDocument(text).sections)
