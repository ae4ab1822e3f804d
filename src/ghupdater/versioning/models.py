"""Data models for version requests."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResolutionMode(Enum):
    """How a requested version is matched against candidates."""
    LATEST = "latest"
    EXACT = "exact"
    PARTIAL = "partial"


@dataclass(frozen=True)
class VersionSpec:
    """Normalized representation of a version request."""
    raw: Optional[str]
    mode: ResolutionMode

    @classmethod
    def latest(cls) -> "VersionSpec":
        return cls(raw=None, mode=ResolutionMode.LATEST)

    @classmethod
    def exact(cls, version: str) -> "VersionSpec":
        return cls(raw=version, mode=ResolutionMode.EXACT)

    @classmethod
    def partial(cls, prefix: str) -> "VersionSpec":
        return cls(raw=prefix, mode=ResolutionMode.PARTIAL)

    @classmethod
    def from_string(cls, text: Optional[str], partial: bool = False) -> "VersionSpec":
        """Parse a user-supplied version request.

        ``None``, an empty string or ``"latest"`` mean the latest release;
        anything else is an exact version, or a dotted prefix when
        ``partial`` is set.
        """
        text = (text or "").strip()
        if not text or text.lower() == "latest":
            return cls.latest()
        if partial:
            return cls.partial(text)
        return cls.exact(text)
