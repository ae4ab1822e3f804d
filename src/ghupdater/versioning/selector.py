"""Pick one version out of normalized candidates for a VersionSpec."""

import re
from typing import Iterable, List, Optional, Tuple

from packaging import version

from .models import ResolutionMode, VersionSpec

_LEADING_DIGITS = re.compile(r"^([0-9]*)(.*)$")


def _dotted_key(text: str) -> Tuple[Tuple[int, int, str], ...]:
    """Component-wise key for versions packaging cannot parse.

    Each dot-separated component compares by its leading number, a bare
    number sorting after the same number with a suffix ("1.0" > "1.0rc1").
    """
    key = []
    for part in text.split("."):
        digits, rest = _LEADING_DIGITS.match(part).groups()
        key.append((int(digits) if digits else -1, 0 if rest else 1, rest))
    return tuple(key)


def _numeric_key(text: str) -> Tuple[int, ...]:
    """Leading number of every dotted component, -1 where there is none."""
    return tuple(component[0] for component in _dotted_key(text))


def version_sort_key(text: str):
    """Sort key: dotted components compared numerically ("10.0" > "9.0").

    Candidates with equal numeric components are ordered by PEP 440 where
    packaging can parse them, parseable ones ranking above the rest.
    """
    try:
        tie_break = (1, version.Version(text))
    except version.InvalidVersion:
        tie_break = (0, _dotted_key(text))
    return (_numeric_key(text), tie_break)


def matches_prefix(candidate: str, prefix: str) -> bool:
    """True when ``prefix``'s dotted components lead ``candidate``'s ("2.3" ~ "2.3.1", not "2.30")."""
    want = prefix.split(".")
    have = candidate.split(".")
    return have[:len(want)] == want


def latest(candidates: Iterable[str]) -> Optional[str]:
    pool: List[str] = list(candidates)
    if not pool:
        return None
    return max(pool, key=version_sort_key)


def select_version(candidates: Iterable[str], spec: Optional[VersionSpec] = None) -> Optional[str]:
    """Select a version matching ``spec``; None means nothing matched.

    Args:
        candidates: Normalized version strings
        spec: Request; defaults to latest

    Returns:
        A member of ``candidates`` or None
    """
    pool = list(candidates)
    spec = spec or VersionSpec.latest()
    if spec.mode == ResolutionMode.LATEST:
        return latest(pool)
    if spec.mode == ResolutionMode.EXACT:
        return spec.raw if spec.raw in pool else None
    if spec.mode == ResolutionMode.PARTIAL:
        return latest(v for v in pool if matches_prefix(v, spec.raw or ""))
    return None
