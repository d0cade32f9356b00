"""Document profiles: named section lookups and their default dictionaries."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, NamedTuple

from .errors import ValidationError


class SectionLookup(NamedTuple):
    section_type: str
    error_message: str


@dataclass(frozen=True)
class SectionProfile:
    """Lookups for one kind of document, e.g. a repository README."""
    name: str
    dictionary_file: str
    lookups: Mapping[str, SectionLookup]
    description: str = ""


def _profile(name: str, dictionary_file: str, description: str, **lookups: SectionLookup) -> SectionProfile:
    return SectionProfile(
        name=name,
        dictionary_file=dictionary_file,
        lookups=MappingProxyType(lookups),
        description=description,
    )


REPO_README = _profile(
    "repo-readme",
    "code-repo-dictionary.json",
    "README of a source code repository",
    installation=SectionLookup("installation", "Installation instructions not found."),
    usage=SectionLookup("usage", "Usage examples not found."),
    contribution=SectionLookup("contribution", "Contribution guidelines not found."),
    license=SectionLookup("license", "License information not found."),
)

NPM_README = _profile(
    "npm-readme",
    "npm-readme-dictionary.json",
    "README of a published npm package",
    installation=SectionLookup("installation", "Installation instructions not found."),
    usage=SectionLookup("usage", "Usage examples not found."),
    cli=SectionLookup("cli", "CLI usage information not found."),
    versioning=SectionLookup("versioning", "Versioning information not found."),
    scripts=SectionLookup("scripts", "Scripts information not found."),
    license=SectionLookup("license", "License information not found."),
)

CHANGELOG = _profile(
    "changelog",
    "changelog-dictionary.json",
    "Keep a Changelog style CHANGELOG",
    unreleased=SectionLookup("unreleased", "Unreleased section not found."),
    added=SectionLookup("added", "No added features found."),
    changed=SectionLookup("changed", "No changes found."),
    deprecated=SectionLookup("deprecated", "No deprecated features found."),
    removed=SectionLookup("removed", "No removed features found."),
    fixed=SectionLookup("fixed", "No fixes found."),
    security=SectionLookup("security", "No security updates found."),
)

PROFILES: Mapping[str, SectionProfile] = MappingProxyType({
    p.name: p for p in (REPO_README, NPM_README, CHANGELOG)
})


def get_profile(name: str) -> SectionProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValidationError(f"Unknown profile: '{name}'") from None
