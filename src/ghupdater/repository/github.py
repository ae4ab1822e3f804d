"""GitHub API client for release discovery.

Lists a repository's releases, falling back to its tags when there are no
releases. Expected failures (missing repository, exhausted quota) come back
as a FetchStatus; anything else raises.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from ghupdater.constants import Constants
from ghupdater.common.http_client import get_json
from ghupdater.common.logging_utils import extra_context, safe_url
from ghupdater.repository.rate_limit import (
    RATE_LIMITER,
    REMAINING_HEADER,
    RateLimiter,
    format_wait,
    header_value,
)
from ghupdater.repository.url_normalize import RepoRef

logger = logging.getLogger(__name__)


class FetchStatus(Enum):
    """Outcome of a release/tag listing."""
    OK = "ok"
    UNREACHABLE = "unreachable"
    RATE_LIMITED = "rate_limited"


@dataclass
class FetchResult:
    """Raw release or tag objects plus where they came from."""
    status: FetchStatus
    records: List[Dict[str, Any]] = field(default_factory=list)
    from_tags: bool = False


class GitHubApiError(Exception):
    """Unexpected GitHub API response (any status but 200, 404 or a quota 403)."""

    def __init__(
        self,
        status_code: int,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.url = url
        self.headers = dict(headers or {})
        super().__init__(message or f"GitHub API returned HTTP {status_code} for {safe_url(url)}")


def _is_zero(value: Optional[str]) -> bool:
    if value is None:
        return False
    try:
        return int(value.strip()) == 0
    except ValueError:
        return False


class GitHubClient:
    """Lightweight REST client for the GitHub releases and tags endpoints.

    Supports optional authentication via the GITHUB_TOKEN environment
    variable (name configurable through Constants.ENV_GITHUB_TOKEN).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        """Initialize GitHub client.

        Args:
            base_url: Base URL for the API (defaults to Constants.GITHUB_API_BASE)
            token: Personal access token (defaults to the token env var)
            session: requests.Session reused across calls
            rate_limiter: Quota tracker (defaults to the process-wide one)
        """
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN) or None
        self.session = session if session is not None else requests.Session()
        self.rate_limiter = rate_limiter if rate_limiter is not None else RATE_LIMITER

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including authorization if token is available."""
        headers = {
            "Accept": Constants.GITHUB_ACCEPT,
            "User-Agent": Constants.USER_AGENT,
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def releases_url(self, ref: RepoRef) -> str:
        """List-releases endpoint URL for ``ref``."""
        return f"{self.base_url}/repos/{ref.owner}/{ref.repo}/releases?per_page={Constants.REPO_API_PER_PAGE}"

    def tags_url(self, ref: RepoRef) -> str:
        """List-tags endpoint URL for ``ref``."""
        return f"{self.base_url}/repos/{ref.owner}/{ref.repo}/tags?per_page={Constants.REPO_API_PER_PAGE}"

    def fetch_releases_or_tags(self, ref: RepoRef) -> FetchResult:
        """List releases of ``ref``, or its tags when it has no releases.

        Returns:
            FetchResult with status OK and the raw JSON objects, UNREACHABLE
            on 404, or RATE_LIMITED when the quota is (or just became)
            exhausted. No request is made while rate limited.

        Raises:
            GitHubApiError: on any other HTTP error, including a 403 that is
                not a quota exhaustion
        """
        outcome = self._get_list(self.releases_url(ref))
        if isinstance(outcome, FetchResult):
            return outcome
        if outcome:
            return FetchResult(FetchStatus.OK, outcome, from_tags=False)

        outcome = self._get_list(self.tags_url(ref))
        if isinstance(outcome, FetchResult):
            return outcome
        return FetchResult(FetchStatus.OK, outcome, from_tags=True)

    def _get_list(self, url: str) -> Union[List[Dict[str, Any]], FetchResult]:
        """GET a list endpoint; terminal outcomes come back as a FetchResult."""
        if self.rate_limiter.rate_limited_now():
            return FetchResult(FetchStatus.RATE_LIMITED)

        status, headers, data = get_json(url, headers=self._get_headers(), session=self.session)

        if status == 404:
            logger.warning(
                "%s: HTTP error %s",
                safe_url(url),
                status,
                extra=extra_context(event="http_response", component="github", outcome="not_found",
                                    status_code=status, target=safe_url(url)),
            )
            return FetchResult(FetchStatus.UNREACHABLE)

        if status == 403:
            if not _is_zero(header_value(headers, REMAINING_HEADER)):
                raise GitHubApiError(status, url, headers)
            self.rate_limiter.record_rate_limit_headers(headers)
            wait = format_wait(self.rate_limiter.seconds_until_reset())
            logger.warning(
                "GitHub API rate limit exceeded at %s; retry in %s",
                safe_url(url),
                wait,
                extra=extra_context(event="http_response", component="github", outcome="rate_limited",
                                    status_code=status, target=safe_url(url)),
            )
            return FetchResult(FetchStatus.RATE_LIMITED)

        if status != 200:
            raise GitHubApiError(status, url, headers)
        if not isinstance(data, list):
            raise GitHubApiError(status, url, headers, message=f"Expected a JSON array from {safe_url(url)}")
        return data
