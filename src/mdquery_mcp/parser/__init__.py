"""Markdown parsing utilities."""

from .markdown import (
    Heading,
    Section,
    build_sections,
    format_text,
    parse_markdown_to_sections,
    scan_headings,
)
from .hierarchy import build_section_tree

__all__ = [
    "Heading",
    "Section",
    "build_sections",
    "build_section_tree",
    "format_text",
    "parse_markdown_to_sections",
    "scan_headings",
]
