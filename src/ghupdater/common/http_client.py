"""Shared HTTP helpers used by the repository clients.

Thin adapter over requests: performs the GET, parses JSON bodies of
successful responses and hands back status code and headers so callers can
make their own decisions about 404/403 handling. Network failures and
malformed JSON are not swallowed here.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from ghupdater.constants import Constants
from ghupdater.common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def normalize_headers(headers: Any) -> Dict[str, str]:
    """Return a plain dict of response headers with lowercased names."""
    if not headers:
        return {}
    return {str(k).lower(): v for k, v in headers.items()}


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    session: Optional[requests.Session] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform a GET request and parse the JSON body of 2xx responses.

    Args:
        url: Target URL
        headers: Optional request headers
        session: Optional requests.Session, reused for connection keep-alive
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, lowercased_headers, parsed_json_or_none)

    Raises:
        requests.RequestException: on connection-level failures
        ValueError: when a successful response carries malformed JSON
    """
    safe_target = safe_url(url)
    getter = session.get if session is not None else requests.get
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                )
            )
        response = getter(url, headers=headers, timeout=Constants.REQUEST_TIMEOUT, **kwargs)

    status_code = response.status_code
    response_headers = normalize_headers(response.headers)
    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                status_code=status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
            )
        )

    if 200 <= status_code < 300:
        return status_code, response_headers, response.json()
    return status_code, response_headers, None
