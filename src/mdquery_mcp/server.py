"""MCP Server for section queries over README and CHANGELOG documents."""

import asyncio
import json
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .tools.fetch_repo_docs import fetch_repo_docs as do_fetch_repo_docs
from .tools.list_repos import (
    list_cached_repos as do_list_cached_repos,
    delete_cached_repo as do_delete_cached_repo,
)
from .tools.list_profiles import list_profiles as do_list_profiles
from .tools.get_outline import get_outline as do_get_outline
from .tools.get_section import (
    get_sections_by_heading as do_get_sections_by_heading,
    query_section as do_query_section,
)
from .tools.get_changelog_range import get_changelog_range as do_get_changelog_range

logger = logging.getLogger(__name__)

# Create MCP server
server = Server("mdquery-mcp")

# Every document tool takes one of these to say which document to read.
DOCUMENT_PROPERTIES = {
    "path": {
        "type": "string",
        "description": "Path to a local Markdown file",
    },
    "content": {
        "type": "string",
        "description": "Markdown text to parse directly",
    },
    "repo": {
        "type": "string",
        "description": "Cached repository (owner/repo or just repo name), see fetch_repo_docs",
    },
    "file_path": {
        "type": "string",
        "description": "File within the cached repository (default README.md, CHANGELOG.md for get_changelog_range)",
    },
}


def _document_args(arguments: dict[str, Any], default_file: str = "README.md") -> dict[str, Any]:
    return {
        "path": arguments.get("path"),
        "content": arguments.get("content"),
        "repo": arguments.get("repo"),
        "file_path": arguments.get("file_path", default_file),
    }


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="fetch_repo_docs",
            description="""Fetch a GitHub repository's README and CHANGELOG into the local cache.

After fetching, pass `repo` (and `file_path`) to the other tools instead of
a local path or inline content.

Supports:
- Public repositories (no token needed)
- Private repositories (set GITHUB_TOKEN environment variable)
- Various URL formats: https://github.com/owner/repo, owner/repo
- Blocked in local-only mode (MDQUERY_LOCAL_ONLY=true)""",
            inputSchema={
                "type": "object",
                "properties": {
                    "url": {
                        "type": "string",
                        "description": "GitHub repository URL or owner/repo string",
                    },
                    "files": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Files to fetch (default: README.md, CHANGELOG.md)",
                    },
                },
                "required": ["url"],
            },
        ),
        Tool(
            name="list_cached_repos",
            description="List repositories whose documents are in the local cache.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="delete_cached_repo",
            description="""Delete a repository's cached documents.

This is irreversible; the documents will need to be fetched again.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "repo": {
                        "type": "string",
                        "description": "Repository identifier (owner/repo or just repo name)",
                    },
                },
                "required": ["repo"],
            },
        ),
        Tool(
            name="list_profiles",
            description="""List the document profiles (repo-readme, npm-readme, changelog),
their section lookups and the keywords each lookup matches in headings.""",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
        Tool(
            name="get_outline",
            description="""Get the heading outline of a Markdown document.

Returns the title (first h1), heading counts per level, the flat heading
list and a nested tree. Use it to see the document structure before
asking for section bodies.""",
            inputSchema={
                "type": "object",
                "properties": {
                    **DOCUMENT_PROPERTIES,
                    "max_level": {
                        "type": "integer",
                        "description": "Only list headings with level <= this value",
                    },
                },
            },
        ),
        Tool(
            name="get_sections_by_heading",
            description="""Get every section whose heading contains a keyword (case-insensitive).

Each body includes the text of the section's subsections.""",
            inputSchema={
                "type": "object",
                "properties": {
                    **DOCUMENT_PROPERTIES,
                    "keyword": {
                        "type": "string",
                        "description": "Text to look for in headings",
                    },
                },
                "required": ["keyword"],
            },
        ),
        Tool(
            name="query_section",
            description="""Find sections of a given type, such as installation, usage or license.

Headings are matched against the profile's keyword dictionary, and each
match includes the deeper sections beneath it. Extra dictionaries can
override the profile's keywords per section type.""",
            inputSchema={
                "type": "object",
                "properties": {
                    **DOCUMENT_PROPERTIES,
                    "section_type": {
                        "type": "string",
                        "description": "Section type, e.g. 'installation', 'license', 'added'",
                    },
                    "profile": {
                        "type": "string",
                        "enum": ["repo-readme", "npm-readme", "changelog"],
                        "default": "repo-readme",
                    },
                    "dictionary_paths": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "JSON dictionaries merged over the profile default, later files win",
                    },
                    "keywords": {
                        "type": "object",
                        "additionalProperties": {"type": "array", "items": {"type": "string"}},
                        "description": "Inline {section_type: [keywords]} merged last",
                    },
                },
                "required": ["section_type"],
            },
        ),
        Tool(
            name="get_changelog_range",
            description="""Get the changelog sections between two versions, both included.

Versions may be given in either order; the later version is expected
first in the document.""",
            inputSchema={
                "type": "object",
                "properties": {
                    **DOCUMENT_PROPERTIES,
                    "start_version": {
                        "type": "string",
                        "description": "Version label, e.g. '2.2.1'",
                    },
                    "end_version": {
                        "type": "string",
                        "description": "Version label, e.g. '2.2.0'",
                    },
                },
                "required": ["start_version", "end_version"],
            },
        ),
    ]


async def dispatch(name: str, arguments: dict[str, Any]) -> dict:
    """Run a tool by name and return its result dict."""
    if name == "fetch_repo_docs":
        return await do_fetch_repo_docs(
            url=arguments["url"],
            files=arguments.get("files"),
        )
    if name == "list_cached_repos":
        return do_list_cached_repos()
    if name == "delete_cached_repo":
        return do_delete_cached_repo(repo=arguments["repo"])
    if name == "list_profiles":
        return do_list_profiles()
    if name == "get_outline":
        return do_get_outline(
            **_document_args(arguments),
            max_level=arguments.get("max_level"),
        )
    if name == "get_sections_by_heading":
        return do_get_sections_by_heading(
            keyword=arguments["keyword"],
            **_document_args(arguments),
        )
    if name == "query_section":
        return do_query_section(
            section_type=arguments["section_type"],
            profile=arguments.get("profile", "repo-readme"),
            dictionary_paths=arguments.get("dictionary_paths"),
            keywords=arguments.get("keywords"),
            **_document_args(arguments),
        )
    if name == "get_changelog_range":
        return do_get_changelog_range(
            start_version=arguments["start_version"],
            end_version=arguments["end_version"],
            **_document_args(arguments, default_file="CHANGELOG.md"),
        )
    return {"error": f"Unknown tool: {name}"}


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        result = await dispatch(name, arguments)
    except Exception as e:
        logger.exception("Tool %s failed", name)
        result = {"error": str(e)}

    return [TextContent(type="text", text=json.dumps(result, indent=2))]


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    logging.basicConfig(level=logging.INFO)
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
