"""Tools to get sections by heading keyword or by section type."""

from typing import Optional

from ..dictionary import DictionarySource
from ..errors import MarkdownQueryError, SourceError
from ..profiles import get_profile
from ..query import SectionQueryEngine
from ..security import is_sensitive_filename
from ._document import document_or_error


def get_sections_by_heading(
    keyword: str,
    path: Optional[str] = None,
    content: Optional[str] = None,
    repo: Optional[str] = None,
    file_path: str = "README.md",
    storage_path: Optional[str] = None,
) -> dict:
    """
    Get every section whose heading contains a keyword (case-insensitive).

    Returns:
        Dict with the matching sections, bodies including their subsections
    """
    document, err = document_or_error(
        path=path, content=content, repo=repo, file_path=file_path, storage_path=storage_path,
    )
    if err:
        return err

    try:
        sections = document.sections_by_heading(keyword)
    except MarkdownQueryError as e:
        return {"error": str(e)}

    return {
        "source": document.source,
        "keyword": keyword,
        "result_count": len(sections),
        "sections": [s.to_dict() for s in sections],
    }


def query_section(
    section_type: str,
    profile: str = "repo-readme",
    path: Optional[str] = None,
    content: Optional[str] = None,
    repo: Optional[str] = None,
    file_path: str = "README.md",
    storage_path: Optional[str] = None,
    dictionary_paths: Optional[list[str]] = None,
    keywords: Optional[dict[str, list[str]]] = None,
) -> dict:
    """
    Find the sections of a given type, e.g. "installation" or "license".

    Args:
        section_type: Profile lookup name or any dictionary section type
        profile: Document profile supplying the default dictionary
        dictionary_paths: JSON dictionaries merged over the profile default
        keywords: Inline dictionary merged last

    Returns:
        Dict with every match (title and formatted body)
    """
    document, err = document_or_error(
        path=path, content=content, repo=repo, file_path=file_path, storage_path=storage_path,
    )
    if err:
        return err

    try:
        section_profile = get_profile(profile)

        # Merge order: profile default, then dictionary_paths in order, then keywords.
        extra: list[DictionarySource] = []
        for dictionary_path in dictionary_paths or []:
            if is_sensitive_filename(dictionary_path):
                raise SourceError(f"Refusing to read sensitive file: {dictionary_path}")
            extra.append(dictionary_path)
        if keywords:
            extra.append(keywords)

        engine = SectionQueryEngine.for_profile(document, section_profile, extra)
        if section_type in section_profile.lookups:
            matches = engine.lookup(section_type)
        else:
            matches = engine.query(section_type)
    except MarkdownQueryError as e:
        return {"error": str(e)}

    return {
        "source": document.source,
        "profile": section_profile.name,
        "section_type": section_type,
        "result_count": len(matches),
        "results": [m.to_dict() for m in matches],
    }
