"""Keyword dictionaries: section type -> heading keywords."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Union

from .errors import SourceError, ValidationError

logger = logging.getLogger(__name__)

# Dictionaries shipped with the package
DICTIONARY_DIR = Path(__file__).parent / "dictionaries"


class NoDictionary:
    """Stands in for "no dictionary supplied"; keyword queries reject it."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_DICTIONARY"


NO_DICTIONARY = NoDictionary()


def _normalize_keyword(keyword) -> str:
    if not isinstance(keyword, str) or not keyword.strip():
        raise ValidationError(f"Keyword must be a non-empty string, got: {keyword!r}")
    return keyword.strip().lower()


def _validate_section_type(section_type) -> str:
    if not isinstance(section_type, str) or not section_type.strip():
        raise ValidationError(f"Section type must be a non-empty string, got: {section_type!r}")
    return section_type


@dataclass(frozen=True)
class KeywordDictionary:
    """Immutable mapping of section type to lowercase keywords."""
    entries: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_mapping(cls, data: Mapping) -> "KeywordDictionary":
        """Validate a `{section_type: [keyword, ...]}` mapping and lowercase it."""
        if not isinstance(data, Mapping):
            raise ValidationError(
                f"Dictionary must map section types to keyword lists, got: {type(data).__name__}"
            )

        entries: dict[str, tuple[str, ...]] = {}
        for section_type, keywords in data.items():
            _validate_section_type(section_type)
            if isinstance(keywords, str) or not isinstance(keywords, (list, tuple)):
                raise ValidationError(
                    f"Keywords for section type '{section_type}' must be a list of strings"
                )
            entries[section_type] = tuple(_normalize_keyword(k) for k in keywords)

        return cls(MappingProxyType(entries))

    def keywords_for(self, section_type: str) -> list[str]:
        """Get all keywords for a section type (empty if absent)."""
        return list(self.entries.get(section_type, ()))

    def with_keyword(self, section_type: str, keyword: str) -> "KeywordDictionary":
        """Return a copy with `keyword` appended to `section_type`'s keywords."""
        _validate_section_type(section_type)
        normalized = _normalize_keyword(keyword)

        entries = dict(self.entries)
        entries[section_type] = entries.get(section_type, ()) + (normalized,)
        return KeywordDictionary(MappingProxyType(entries))

    def section_types(self) -> list[str]:
        return list(self.entries)

    def to_dict(self) -> dict[str, list[str]]:
        return {key: list(value) for key, value in self.entries.items()}

    def __contains__(self, section_type) -> bool:
        return section_type in self.entries

    def __len__(self) -> int:
        return len(self.entries)


DictionaryLike = Union[NoDictionary, KeywordDictionary]
DictionarySource = Union[str, Path, Mapping, KeywordDictionary]


def load_dictionary(path: Union[str, Path]) -> KeywordDictionary:
    """
    Load a keyword dictionary from a JSON file.

    Raises:
        SourceError: If the file cannot be read, is not valid JSON, or does
            not have the `{section_type: [keyword, ...]}` shape.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SourceError(f"Error loading dictionary from file: {e}") from e

    try:
        dictionary = KeywordDictionary.from_mapping(data)
    except ValidationError as e:
        raise SourceError(f"Error loading dictionary from file: {path}: {e}") from e

    logger.debug("Loaded %d section types from %s", len(dictionary), path)
    return dictionary


def default_dictionary_path(name: str) -> Path:
    """Path of a dictionary file shipped with the package."""
    return DICTIONARY_DIR / name


def _coerce(source: DictionarySource) -> KeywordDictionary:
    if isinstance(source, KeywordDictionary):
        return source
    if isinstance(source, (str, Path)):
        return load_dictionary(source)
    return KeywordDictionary.from_mapping(source)


def merge_dictionaries(sources: list[DictionarySource]) -> KeywordDictionary:
    """
    Merge dictionary sources left to right.

    A later source replaces the whole keyword list of any section type it
    shares with an earlier one; lists are never concatenated.

    Args:
        sources: File paths, plain mappings or KeywordDictionary values

    Returns:
        The merged dictionary
    """
    merged: dict[str, tuple[str, ...]] = {}
    for source in sources:
        merged.update(_coerce(source).entries)

    logger.debug("Merged %d dictionary sources into %d section types", len(sources), len(merged))
    return KeywordDictionary(MappingProxyType(merged))
