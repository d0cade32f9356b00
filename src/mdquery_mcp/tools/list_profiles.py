"""Tool to list document profiles and their keywords."""

from ..dictionary import default_dictionary_path, load_dictionary
from ..profiles import PROFILES


def list_profiles() -> dict:
    """
    List the document profiles with their lookups and default keywords.

    Returns:
        Dict with one entry per profile
    """
    profiles = []
    for profile in PROFILES.values():
        dictionary = load_dictionary(default_dictionary_path(profile.dictionary_file))
        profiles.append({
            "name": profile.name,
            "description": profile.description,
            "section_types": dictionary.section_types(),
            "lookups": {
                name: {
                    "section_type": lookup.section_type,
                    "keywords": dictionary.keywords_for(lookup.section_type),
                }
                for name, lookup in profile.lookups.items()
            },
        })

    return {"count": len(profiles), "profiles": profiles}
