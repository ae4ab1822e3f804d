"""Propose new upstream versions for GitHub-hosted packages.

Resolves the repository behind a package's source, lists its releases (or
tags), picks a version and rewrites the source location for it. Every
"nothing to propose" outcome returns None; unexpected API failures raise.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ghupdater.common.logging_utils import extra_context, is_debug_enabled, safe_url
from ghupdater.models import PackageRecord, ReleaseRecord, Source, UpstreamSource, VcsSource
from ghupdater.repository.github import FetchStatus, GitHubClient
from ghupdater.repository.url_normalize import RepoRef, is_github_url, parse_repo_ref
from ghupdater.repository.url_rewrite import rewrite_source
from ghupdater.repository.version_match import filter_prereleases, normalize_releases
from ghupdater.versioning.models import VersionSpec
from ghupdater.versioning.selector import select_version

logger = logging.getLogger(__name__)

_default_client: Optional[GitHubClient] = None


def default_client() -> GitHubClient:
    """Shared client so consecutive packages reuse one HTTP session."""
    global _default_client  # pylint: disable=global-statement
    if _default_client is None:
        _default_client = GitHubClient()
    return _default_client


def _github_location(source: Source) -> Tuple[Optional[str], bool]:
    """Return (first GitHub URL of ``source``, is_vcs)."""
    if isinstance(source, VcsSource):
        return (source.url if is_github_url(source.url) else None), True
    for uri in source.uris:
        if is_github_url(uri):
            return uri, False
    return None, False


def is_github_package(record: PackageRecord) -> bool:
    """True when the package's source is hosted on GitHub."""
    return _github_location(record.source)[0] is not None


def _no_update(record: PackageRecord, reason: str, ref: Optional[RepoRef] = None) -> None:
    if is_debug_enabled(logger):
        logger.debug(
            "No update for %s: %s",
            record.name,
            reason,
            extra=extra_context(event="no_update", component="updater", package=record.name,
                                reason=reason, target=ref.slug if ref else None),
        )


def propose_update(
    record: PackageRecord,
    spec: Optional[VersionSpec] = None,
    client: Optional[GitHubClient] = None,
) -> Optional[UpstreamSource]:
    """Propose the upstream source of ``record`` for the requested version.

    Args:
        record: Package to update
        spec: Version request, latest release by default
        client: GitHub client, the shared default when omitted

    Returns:
        UpstreamSource, or None when there is nothing to propose (not on
        GitHub, repository missing, rate limited, no parseable tag, no
        matching version, or no known URL layout).

    Raises:
        GitHubApiError: on unexpected API responses
        requests.RequestException: on network failures
    """
    url, vcs = _github_location(record.source)
    if url is None:
        _no_update(record, "not_on_github")
        return None
    ref = parse_repo_ref(url, vcs=vcs)
    if ref is None:
        _no_update(record, "no_repository_in_url")
        return None

    result = (client or default_client()).fetch_releases_or_tags(ref)
    if result.status != FetchStatus.OK:
        _no_update(record, result.status.value, ref)
        return None

    releases = [ReleaseRecord.from_json(obj) for obj in result.records if isinstance(obj, dict)]
    releases = filter_prereleases(releases, from_tags=result.from_tags)
    candidates = normalize_releases(releases, record.name)
    if not candidates:
        logger.warning(
            "No usable version tags found for %s (%s)",
            ref.slug,
            safe_url(url),
            extra=extra_context(event="no_update", component="updater", package=record.name,
                                reason="no_version_tags", target=ref.slug),
        )
        return None

    selected = select_version((c.normalized_version for c in candidates), spec)
    if selected is None:
        _no_update(record, "version_not_found", ref)
        return None
    candidate = next(c for c in candidates if c.normalized_version == selected)

    new_url = rewrite_source(record.source, record.name, record.version, ref.repo, selected)
    if new_url is None:
        _no_update(record, "no_url_template", ref)
        return None

    if isinstance(record.source, VcsSource):
        locations = VcsSource(url=new_url, ref=candidate.original_tag)
        return UpstreamSource(package_name=record.name, version=selected, locations=locations)
    return UpstreamSource(package_name=record.name, version=selected, locations=[new_url])


@dataclass(frozen=True)
class Updater:
    """Registration record through which a package-set refresher finds updaters."""
    name: str
    description: str
    predicate: Callable[[PackageRecord], bool]
    propose: Callable[..., Optional[UpstreamSource]]


GITHUB_UPDATER = Updater(
    name="github",
    description="Updater for GitHub packages",
    predicate=is_github_package,
    propose=propose_update,
)
