"""Section extraction and keyword queries for Markdown documents."""

from .changelog import updates_between_versions
from .dictionary import (
    NO_DICTIONARY,
    KeywordDictionary,
    NoDictionary,
    load_dictionary,
    merge_dictionaries,
)
from .document import MarkdownDocument, parse_markdown
from .errors import (
    MarkdownQueryError,
    NotFoundError,
    SourceError,
    StructuralError,
    ValidationError,
)
from .parser.markdown import Heading, Section, build_sections, format_text, scan_headings
from .profiles import CHANGELOG, NPM_README, PROFILES, REPO_README, SectionProfile, get_profile
from .query import SectionMatch, SectionQueryEngine

__version__ = "0.1.0"

__all__ = [
    "CHANGELOG",
    "Heading",
    "KeywordDictionary",
    "MarkdownDocument",
    "MarkdownQueryError",
    "NO_DICTIONARY",
    "NPM_README",
    "NoDictionary",
    "NotFoundError",
    "PROFILES",
    "REPO_README",
    "Section",
    "SectionMatch",
    "SectionProfile",
    "SectionQueryEngine",
    "SourceError",
    "StructuralError",
    "ValidationError",
    "build_sections",
    "format_text",
    "get_profile",
    "load_dictionary",
    "merge_dictionaries",
    "parse_markdown",
    "scan_headings",
    "updates_between_versions",
]
