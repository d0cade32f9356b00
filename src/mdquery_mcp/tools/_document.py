"""Resolve a tool's document arguments into a parsed MarkdownDocument."""

import os
from typing import Optional

from ..document import MarkdownDocument
from ..errors import MarkdownQueryError, SourceError
from ..security import ensure_no_secrets
from ..storage.document_store import DocumentStore


def resolve_repo(store: DocumentStore, repo: str) -> tuple[str, str]:
    """Parse a cached repo identifier (owner/name or just name)."""
    if "/" in repo:
        owner, name = repo.split("/", 1)
        return owner, name

    matching = [r for r in store.list_repos() if r["repo"].endswith(f"/{repo}")]
    if not matching:
        raise SourceError(f"Repository not found: {repo}")
    owner, name = matching[0]["repo"].split("/", 1)
    return owner, name


def load_document(
    path: Optional[str] = None,
    content: Optional[str] = None,
    repo: Optional[str] = None,
    file_path: str = "README.md",
    storage_path: Optional[str] = None,
) -> MarkdownDocument:
    """
    Build a document from exactly one of `path`, `content` or `repo`.

    Local paths must stay inside MDQUERY_DOCS_ROOT when it is set. Cached
    repository documents are read from the document store.
    """
    given = [name for name, value in (("path", path), ("content", content), ("repo", repo)) if value is not None]
    if len(given) != 1:
        raise SourceError("Provide exactly one of 'path', 'content' or 'repo'.")

    if content is not None:
        return MarkdownDocument(content)

    if path is not None:
        document = MarkdownDocument.from_file(path, base_path=os.environ.get("MDQUERY_DOCS_ROOT") or None)
        ensure_no_secrets(document.text, path)
        return document

    store = DocumentStore(storage_path)
    owner, name = resolve_repo(store, repo)
    text = store.load_content(owner, name, file_path)
    if text is None:
        raise SourceError(
            f"Document not cached: {owner}/{name}/{file_path}. Run fetch_repo_docs first."
        )
    return MarkdownDocument(text, source=f"{owner}/{name}/{file_path}")


def document_or_error(**kwargs) -> tuple[Optional[MarkdownDocument], Optional[dict]]:
    """load_document, with failures turned into a tool error dict."""
    try:
        return load_document(**kwargs), None
    except MarkdownQueryError as e:
        return None, {"error": str(e)}
