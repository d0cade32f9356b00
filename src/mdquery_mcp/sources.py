"""Where Markdown text comes from: local files and GitHub repositories."""

import logging
import os
import re
from pathlib import Path
from typing import Optional, Union

import httpx

from .errors import SourceError
from .security import is_sensitive_filename, is_within

logger = logging.getLogger(__name__)

DOC_EXTENSIONS = ('.md', '.markdown', '.mdx', '.txt')

DEFAULT_MAX_FILE_BYTES = 1024 * 1024

GITHUB_API = "https://api.github.com"

USER_AGENT = "mdquery-mcp"


def max_file_bytes() -> int:
    """Size limit for local documents (MDQUERY_MAX_FILE_BYTES, default 1 MiB)."""
    raw = os.environ.get("MDQUERY_MAX_FILE_BYTES", "")
    try:
        return int(raw) if raw else DEFAULT_MAX_FILE_BYTES
    except ValueError:
        logger.warning("Ignoring invalid MDQUERY_MAX_FILE_BYTES=%r", raw)
        return DEFAULT_MAX_FILE_BYTES


def read_markdown_file(
    path: Union[str, Path],
    base_path: Optional[Union[str, Path]] = None,
) -> str:
    """
    Read a local Markdown file.

    Args:
        path: File to read
        base_path: If given, the file must resolve inside this directory

    Returns:
        File content with line endings normalized to \\n

    Raises:
        SourceError: If the path is empty, missing, not a documentation
            file, sensitive, outside base_path, too large or unreadable
    """
    if not path:
        raise SourceError("File path is not provided or is empty.")

    resolved = Path(path).resolve()
    if base_path is not None and not is_within(resolved, Path(base_path).resolve()):
        raise SourceError(f"Path escapes base directory: {path}")
    if not resolved.exists():
        raise SourceError(f"File does not exist: {path}")
    if not resolved.is_file():
        raise SourceError(f"Path is not a file: {path}")
    if is_sensitive_filename(resolved.name):
        raise SourceError(f"Refusing to read sensitive file: {path}")
    if resolved.suffix.lower() not in DOC_EXTENSIONS:
        raise SourceError(f"Not a Markdown file: {path}")

    limit = max_file_bytes()
    size = resolved.stat().st_size
    if size > limit:
        raise SourceError(f"File too large ({size} bytes, limit {limit}): {path}")

    try:
        content = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Error reading file: {e}") from e

    return content.replace('\r\n', '\n')


def parse_github_url(url: str) -> tuple[str, str]:
    """Extract owner and repo name from GitHub URL."""
    patterns = [
        r"github\.com/([^/]+)/([^/]+)",  # https://github.com/owner/repo
        r"^([^/]+)/([^/]+)$",  # owner/repo
    ]

    for pattern in patterns:
        match = re.search(pattern, url.strip().rstrip('/'))
        if match:
            owner = match.group(1)
            repo = match.group(2)
            if repo.endswith('.git'):
                repo = repo[:-4]
            return owner, repo

    raise SourceError(f"Could not parse GitHub URL: {url}")


def _github_headers(accept: str, token: Optional[str]) -> dict[str, str]:
    headers = {"Accept": accept, "User-Agent": USER_AGENT}
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


async def fetch_file_content(
    owner: str,
    repo: str,
    path: str,
    token: Optional[str] = None,
) -> str:
    """Fetch raw content of a file from GitHub."""
    url = f"{GITHUB_API}/repos/{owner}/{repo}/contents/{path}"
    headers = _github_headers("application/vnd.github.v3.raw", token)

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(url, headers=headers)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise SourceError(
            f"Could not fetch {owner}/{repo}/{path}: HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise SourceError(f"Could not fetch {owner}/{repo}/{path}: {e}") from e

    return response.text.replace('\r\n', '\n')


async def fetch_commit_sha(
    owner: str,
    repo: str,
    token: Optional[str] = None,
) -> str:
    """Fetch the HEAD commit SHA, or "" when GitHub does not provide it."""
    url = f"{GITHUB_API}/repos/{owner}/{repo}/commits/HEAD"
    headers = _github_headers("application/vnd.github.v3+json", token)

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(url, headers=headers)
    except httpx.HTTPError as e:
        logger.info("Could not fetch HEAD commit for %s/%s: %s", owner, repo, e)
        return ""

    if response.status_code != 200:
        return ""
    return response.json().get("sha", "")
