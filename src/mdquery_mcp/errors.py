"""Exceptions raised by the section extraction and query engine."""


class MarkdownQueryError(Exception):
    """Base class for all mdquery errors."""


class NotFoundError(MarkdownQueryError, LookupError):
    """No section matched a keyword, heading or version-range query."""


class ValidationError(MarkdownQueryError, ValueError):
    """An argument (keyword, section type, dictionary entry) is invalid."""


class SourceError(MarkdownQueryError):
    """A Markdown file or dictionary could not be read or parsed."""


class StructuralError(MarkdownQueryError):
    """The document lacks structure a caller requires (e.g. an h1 title)."""
