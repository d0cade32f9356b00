"""Tool to get the changelog entries between two versions."""

from typing import Optional

from ..errors import MarkdownQueryError
from ._document import document_or_error


def get_changelog_range(
    start_version: str,
    end_version: str,
    path: Optional[str] = None,
    content: Optional[str] = None,
    repo: Optional[str] = None,
    file_path: str = "CHANGELOG.md",
    storage_path: Optional[str] = None,
) -> dict:
    """
    Get every section from one version heading to another, both included.

    The versions may be given in either order.
    """
    document, err = document_or_error(
        path=path, content=content, repo=repo, file_path=file_path, storage_path=storage_path,
    )
    if err:
        return err

    try:
        sections = document.updates_between_versions(start_version, end_version)
    except MarkdownQueryError as e:
        return {"error": str(e)}

    return {
        "source": document.source,
        "start_version": start_version,
        "end_version": end_version,
        "section_count": len(sections),
        "sections": [s.to_dict() for s in sections],
    }
