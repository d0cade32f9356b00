"""Tools to list and delete cached repositories."""

from typing import Optional

from ..errors import SourceError
from ..storage.document_store import DocumentStore
from ._document import resolve_repo


def list_cached_repos(storage_path: Optional[str] = None) -> dict:
    """
    List all cached repositories.

    Args:
        storage_path: Custom cache path (defaults to ~/.mdquery-cache)

    Returns:
        Dict with list of cached repos and their files
    """
    store = DocumentStore(storage_path)
    repos = store.list_repos()

    return {
        "count": len(repos),
        "repos": repos,
    }


def delete_cached_repo(repo: str, storage_path: Optional[str] = None) -> dict:
    """Delete a repository's cached documents."""
    store = DocumentStore(storage_path)
    try:
        owner, name = resolve_repo(store, repo)
    except SourceError as e:
        return {"error": str(e)}

    if store.delete_repo(owner, name):
        return {"success": True, "message": f"Cache deleted for {owner}/{name}"}
    return {"success": False, "error": f"No cache found for {owner}/{name}"}
