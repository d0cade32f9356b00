"""Tool to fetch a GitHub repository's README and CHANGELOG into the cache."""

import logging
import os
from typing import Optional

from ..errors import SourceError
from ..security import find_secrets, is_safe_relative_path, is_sensitive_filename
from ..sources import fetch_commit_sha, fetch_file_content, parse_github_url
from ..storage.document_store import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_FILES = ("README.md", "CHANGELOG.md")


def is_local_only() -> bool:
    return os.environ.get('MDQUERY_LOCAL_ONLY', '').lower() in ('true', '1', 'yes')


async def fetch_repo_docs(
    url: str,
    files: Optional[list[str]] = None,
    github_token: Optional[str] = None,
    storage_path: Optional[str] = None,
) -> dict:
    """
    Fetch Markdown files from a GitHub repository and cache them.

    Args:
        url: GitHub repository URL or owner/repo string
        files: Paths within the repository (defaults to README.md and CHANGELOG.md)
        github_token: GitHub personal access token (for private repos)
        storage_path: Custom cache path (defaults to ~/.mdquery-cache)

    Returns:
        Dict with the cached files and any that were skipped
    """
    if is_local_only():
        return {
            "success": False,
            "error": "Remote fetching disabled in local-only mode. Set MDQUERY_LOCAL_ONLY=false or unset to enable.",
        }

    try:
        owner, repo = parse_github_url(url)
    except SourceError as e:
        return {"success": False, "error": str(e)}

    token = github_token or os.environ.get("GITHUB_TOKEN")

    documents: dict[str, str] = {}
    failed: dict[str, str] = {}
    skipped_secrets: list[str] = []

    for file_path in files or DEFAULT_FILES:
        if not is_safe_relative_path(file_path):
            logger.warning("Skipping path outside the repository: %s", file_path)
            failed[file_path] = "invalid path"
            continue

        if is_sensitive_filename(file_path):
            logger.info("Skipping sensitive file: %s", file_path)
            failed[file_path] = "sensitive file"
            continue

        try:
            content = await fetch_file_content(owner, repo, file_path, token)
        except SourceError as e:
            logger.info("%s", e)
            failed[file_path] = str(e)
            continue

        detected = find_secrets(content)
        if detected:
            logger.warning("Secret detected in %s: %s; skipping file", file_path, ', '.join(detected))
            skipped_secrets.append(file_path)
            continue

        documents[file_path] = content

    if not documents:
        return {
            "success": False,
            "error": "No documents fetched",
            "repo": f"{owner}/{repo}",
            "failed": failed,
        }

    commit_hash = await fetch_commit_sha(owner, repo, token)

    store = DocumentStore(storage_path)
    try:
        manifest = store.save_documents(owner, repo, documents, commit_hash=commit_hash)
    except SourceError as e:
        return {"success": False, "error": str(e), "repo": f"{owner}/{repo}"}
    logger.info("Cached %d documents for %s/%s", len(documents), owner, repo)

    result = {
        "success": True,
        "repo": manifest.repo,
        "fetched_at": manifest.fetched_at,
        "files": sorted(documents),
        "commit_hash": manifest.commit_hash,
    }
    if failed:
        result["failed"] = failed
    if skipped_secrets:
        result["skipped_secrets"] = skipped_secrets
    return result
