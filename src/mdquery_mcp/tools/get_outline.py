"""Tool to get the heading outline of a document."""

from typing import Optional

from ..errors import StructuralError
from ..parser.hierarchy import node_to_dict
from ..parser.markdown import slugify
from ._document import document_or_error


def get_outline(
    path: Optional[str] = None,
    content: Optional[str] = None,
    repo: Optional[str] = None,
    file_path: str = "README.md",
    storage_path: Optional[str] = None,
    max_level: Optional[int] = None,
) -> dict:
    """
    Get the heading structure of a document.

    Args:
        path: Local Markdown file
        content: Markdown text
        repo: Cached repository identifier (owner/name or just name)
        file_path: File within the cached repository
        storage_path: Custom cache path (defaults to ~/.mdquery-cache)
        max_level: Only list headings with level <= this value

    Returns:
        Dict with title, per-level heading counts, flat headings and tree
    """
    document, err = document_or_error(
        path=path, content=content, repo=repo, file_path=file_path, storage_path=storage_path,
    )
    if err:
        return err

    try:
        title = document.title
    except StructuralError:
        title = None

    sections = document.sections
    if max_level is not None:
        sections = tuple(s for s in sections if s.level <= max_level)

    return {
        "source": document.source,
        "title": title,
        "heading_counts": {str(level): count for level, count in sorted(document.count_headings_by_level().items())},
        "section_count": len(sections),
        "sections": [
            {
                "level": s.level,
                "heading": s.heading,
                "anchor": slugify(s.heading),
                "offset": s.start_offset,
            }
            for s in sections
        ],
        "tree": [node_to_dict(node) for node in document.outline()],
    }
