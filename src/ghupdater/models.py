"""Data models for package records, release records and update proposals."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class ArchiveSource:
    """One or more mirror URLs for a source archive."""
    uris: Tuple[str, ...]

    def __post_init__(self):
        uris = (self.uris,) if isinstance(self.uris, str) else tuple(self.uris)
        object.__setattr__(self, "uris", uris)


@dataclass(frozen=True)
class VcsSource:
    """A version-control checkout: repository URL plus commit/tag reference."""
    url: str
    ref: str


Source = Union[ArchiveSource, VcsSource]


@dataclass(frozen=True)
class PackageRecord:
    """Known package: canonical name, current version and where its source lives."""
    name: str
    version: str
    source: Source


@dataclass
class ReleaseRecord:
    """Release or tag entry as returned by the list endpoints."""
    tag: str
    is_prerelease: bool = False

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "ReleaseRecord":
        """Build from a release (``tag_name``) or tag (``name``) object."""
        tag = obj.get("tag_name")
        if not tag:
            tag = obj.get("name") or ""
        return cls(tag=str(tag), is_prerelease=bool(obj.get("prerelease", False)))


@dataclass(frozen=True)
class VersionCandidate:
    """Normalized version along with the exact tag it came from."""
    normalized_version: str
    original_tag: str


@dataclass(frozen=True)
class UpstreamSource:
    """Proposed update for a package.

    ``locations`` mirrors the input source: a list of URLs for archive
    sources, or a VcsSource carrying the new ref.
    """
    package_name: str
    version: str
    locations: Union[List[str], VcsSource] = field(default_factory=list)

    @property
    def urls(self) -> List[str]:
        """Download URLs, or the repository URL for a VCS proposal."""
        if isinstance(self.locations, VcsSource):
            return [self.locations.url]
        return list(self.locations)

    @property
    def ref(self) -> Optional[str]:
        """New VCS ref (the exact upstream tag); None for archive proposals."""
        if isinstance(self.locations, VcsSource):
            return self.locations.ref
        return None
