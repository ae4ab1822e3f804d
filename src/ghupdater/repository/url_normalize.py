"""Recognize GitHub-hosted URLs and extract the owner/repository pair."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ghupdater.constants import Constants


@dataclass(frozen=True)
class RepoRef:
    """Owner/repository pair identifying a GitHub repository."""
    owner: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"


def is_github_url(url: Optional[str]) -> bool:
    """Pure predicate: does ``url`` start with the GitHub origin prefix."""
    return bool(url) and url.startswith(Constants.GITHUB_URL_PREFIX)


def parse_repo_ref(url: str, vcs: bool = False) -> Optional[RepoRef]:
    """Extract owner and repo from a GitHub URL.

    ``https://github.com/arq5x/bedtools2/archive/v2.24.0.tar.gz`` gives
    ``RepoRef("arq5x", "bedtools2")``. With ``vcs`` set, a trailing ``.git``
    on the repository segment is dropped.

    Returns None for non-GitHub URLs or URLs lacking an owner/repo path.
    """
    if not is_github_url(url):
        return None
    path = url[len(Constants.GITHUB_URL_PREFIX):]
    path = path.split("?", 1)[0].split("#", 1)[0]
    segments = path.split("/")
    if len(segments) < 2:
        return None
    owner, repo = segments[0], segments[1]
    if vcs and repo.endswith(".git"):
        repo = repo[:-len(".git")]
    if not owner or not repo:
        return None
    return RepoRef(owner=owner, repo=repo)
