"""Extract the sections between two version headings of a changelog."""

import logging
from typing import Sequence

from packaging.version import InvalidVersion, Version

from .errors import NotFoundError, ValidationError
from .parser.markdown import Section

logger = logging.getLogger(__name__)


def _parse_version(label: str):
    try:
        return Version(label)
    except InvalidVersion:
        return None


def order_version_labels(start_label: str, end_label: str) -> tuple[str, str]:
    """
    Put the later version first.

    Changelogs list releases newest first, so the later version is the one
    met first in document order. Labels that are not versions keep the
    caller's order.
    """
    start_version = _parse_version(start_label)
    end_version = _parse_version(end_label)
    if start_version is None or end_version is None:
        logger.debug("Not comparing non-version labels %r and %r", start_label, end_label)
        return start_label, end_label

    if start_version < end_version:
        return end_label, start_label
    return start_label, end_label


def updates_between_versions(
    sections: Sequence[Section],
    start_label: str,
    end_label: str,
) -> list[Section]:
    """
    Get every section from the start version heading to the end version heading.

    Both endpoints are included and every section in between is collected
    whatever its level. Headings are matched by substring. The end label is
    only looked for after the start section; when both labels are the same,
    the start section alone is the range.

    Raises:
        ValidationError: If a label is empty or not a string
        NotFoundError: If the start heading is missing or the end heading
            never follows it
    """
    for label in (start_label, end_label):
        if not isinstance(label, str) or not label.strip():
            raise ValidationError(f"Version label must be a non-empty string, got: {label!r}")

    start_label, end_label = order_version_labels(start_label, end_label)

    updates: list[Section] = []
    found_end = False

    for section in sections:
        if not updates:
            if start_label in section.heading:
                updates.append(section)
                if start_label == end_label:
                    found_end = True
                    break
            continue

        updates.append(section)
        if end_label in section.heading:
            found_end = True
            break

    if not updates or not found_end:
        raise NotFoundError(
            f"No updates found between versions {start_label} and {end_label}"
        )

    logger.debug("Collected %d sections between %s and %s", len(updates), start_label, end_label)
    return updates
