"""Tag normalization and release filtering.

Turns raw release/tag labels into dotted version candidates. Rules are
applied in a fixed order and the first applicable one decides; the original
tag is kept next to the version because VCS refs must use it verbatim.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from ghupdater.models import ReleaseRecord, VersionCandidate

_VERSION_WORD = "version"


def _starts_with_digit(text: str) -> bool:
    return bool(text) and "0" <= text[0] <= "9"


def _strip_prefix(tag: str, package_name: str) -> Optional[str]:
    """Return the version-bearing part of ``tag`` or None when it has none."""
    name_prefix = f"{package_name}-"
    if package_name and tag.startswith(name_prefix) and len(tag) > len(name_prefix):
        return tag[len(name_prefix):]
    if tag.startswith(_VERSION_WORD):
        # "version1.2" -> "1.2", "version.2.1" -> "2.1"
        skip = len(_VERSION_WORD)
        if not (len(tag) > skip and _starts_with_digit(tag[skip])):
            skip += 1
        return tag[skip:]
    if tag.startswith("v"):
        return tag[1:]
    if _starts_with_digit(tag):
        return tag
    return None


def normalize_tag(tag: str, package_name: str) -> Optional[VersionCandidate]:
    """Map a raw tag to a VersionCandidate, or None if it is not a release tag.

    Args:
        tag: Raw tag or release name, e.g. "v0.25.0" or "fdupes-1.51"
        package_name: Canonical package name, stripped when used as prefix

    Returns:
        VersionCandidate whose version starts with a digit, or None
    """
    remainder = _strip_prefix(tag or "", package_name)
    if remainder is None or not _starts_with_digit(remainder):
        return None
    return VersionCandidate(normalized_version=remainder, original_tag=tag)


def filter_prereleases(records: Iterable[ReleaseRecord], from_tags: bool = False) -> List[ReleaseRecord]:
    """Drop pre-releases when at least one stable release exists.

    Tag listings carry no pre-release flag, so they are returned unchanged;
    so is a release listing where every entry is a pre-release.
    """
    records = list(records)
    if from_tags:
        return records
    stable = [r for r in records if not r.is_prerelease]
    return stable if stable else records


def normalize_releases(records: Iterable[ReleaseRecord], package_name: str) -> List[VersionCandidate]:
    """Normalize every record, discarding rejected tags."""
    candidates = []
    for record in records:
        candidate = normalize_tag(record.tag, package_name)
        if candidate is not None:
            candidates.append(candidate)
    return candidates
