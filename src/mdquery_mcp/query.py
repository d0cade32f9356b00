"""Keyword-driven section queries over a parsed document."""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from .dictionary import (
    NO_DICTIONARY,
    DictionaryLike,
    DictionarySource,
    KeywordDictionary,
    NoDictionary,
    default_dictionary_path,
    merge_dictionaries,
)
from .document import MarkdownDocument
from .errors import NotFoundError, ValidationError
from .parser.markdown import Section, format_text, render_subsection
from .profiles import SectionProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionMatch:
    """A query result: a matched heading and its display-ready body."""
    title: str
    body: str

    def to_dict(self) -> dict:
        return {"title": self.title, "body": self.body}


def _heading_matches(section: Section, keywords: Sequence[str]) -> bool:
    heading = section.heading.lower()
    return any(keyword in heading for keyword in keywords)


def collect_matches(sections: Sequence[Section], keywords: Sequence[str]) -> list[Section]:
    """
    Group sections into keyword matches.

    A section whose heading contains a keyword opens a match. Following
    deeper sections that do not match are appended to it as `## heading`
    blocks. Any other section closes the open match, and unrelated
    sections after it do not reopen it.
    """
    matches: list[Section] = []
    current: Optional[Section] = None

    for section in sections:
        if _heading_matches(section, keywords):
            if current is not None:
                matches.append(current)
            current = section
        elif current is not None and section.level > current.level:
            current = replace(
                current,
                body=current.body + render_subsection(section.heading, section.body),
            )
        elif current is not None:
            matches.append(current)
            current = None

    if current is not None:
        matches.append(current)

    return matches


class SectionQueryEngine:
    """
    Answer section-type queries for one document.

    The engine owns its dictionary: `add_keyword` swaps in an extended copy,
    so callers sharing an engine across threads must serialize it.
    """

    def __init__(
        self,
        document: MarkdownDocument,
        dictionary: DictionaryLike = NO_DICTIONARY,
        profile: Optional[SectionProfile] = None,
    ):
        self.document = document
        self.dictionary = dictionary
        self.profile = profile

    @classmethod
    def for_profile(
        cls,
        document: MarkdownDocument,
        profile: SectionProfile,
        extra_dictionaries: Sequence[DictionarySource] = (),
    ) -> "SectionQueryEngine":
        """
        Build an engine with the profile's default dictionary.

        Sources merge in this order: the profile's shipped dictionary,
        then each of `extra_dictionaries`. Later sources replace the
        keyword lists of earlier ones.
        """
        sources: list[DictionarySource] = [default_dictionary_path(profile.dictionary_file)]
        sources.extend(extra_dictionaries)
        return cls(document, merge_dictionaries(sources), profile)

    def _require_dictionary(self) -> KeywordDictionary:
        if isinstance(self.dictionary, NoDictionary):
            raise ValidationError("No dictionary provided for keyword search.")
        return self.dictionary

    def query(self, section_type: str, error_message: Optional[str] = None) -> list[SectionMatch]:
        """
        Find every section whose heading contains a keyword for `section_type`.

        Args:
            section_type: Dictionary key, e.g. "installation"
            error_message: Message for the NotFoundError raised on no match

        Returns:
            List of matches with formatted bodies, in document order
        """
        dictionary = self._require_dictionary()
        if not isinstance(section_type, str) or not section_type.strip():
            raise ValidationError(f"Section type must be a non-empty string, got: {section_type!r}")
        keywords = dictionary.keywords_for(section_type)
        matches = collect_matches(self.document.flat_sections, keywords)

        if not matches:
            if error_message:
                raise NotFoundError(f"{error_message} (section type: '{section_type}')")
            raise NotFoundError(f"No section found for section type: '{section_type}'")

        logger.debug("Section type %s matched %d sections", section_type, len(matches))
        return [SectionMatch(title=s.heading, body=format_text(s.body)) for s in matches]

    def lookup(self, name: str) -> list[SectionMatch]:
        """Run one of the profile's named lookups, e.g. "installation"."""
        if self.profile is None:
            raise ValidationError(f"No profile configured for lookup '{name}'")
        if name not in self.profile.lookups:
            raise ValidationError(f"Unknown lookup '{name}' for profile '{self.profile.name}'")

        section_type, error_message = self.profile.lookups[name]
        return self.query(section_type, error_message)

    def add_keyword(self, section_type: str, keyword: str) -> None:
        """Add a keyword to a section type, creating the type if needed."""
        self.dictionary = self._require_dictionary().with_keyword(section_type, keyword)
