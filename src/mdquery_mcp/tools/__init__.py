"""MCP tool implementations."""

from .fetch_repo_docs import fetch_repo_docs
from .list_repos import list_cached_repos, delete_cached_repo
from .list_profiles import list_profiles
from .get_outline import get_outline
from .get_section import get_sections_by_heading, query_section
from .get_changelog_range import get_changelog_range

__all__ = [
    "fetch_repo_docs",
    "list_cached_repos",
    "delete_cached_repo",
    "list_profiles",
    "get_outline",
    "get_sections_by_heading",
    "query_section",
    "get_changelog_range",
]
