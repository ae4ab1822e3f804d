"""Rewrite GitHub download URLs for a new version.

GitHub archive and release-asset URLs follow a handful of layouts. The old
URL is matched against each layout with the old version substituted in;
the first layout whose suffix matches exactly is rebuilt with the new
version. A loose release-asset pattern is the last resort.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ghupdater.constants import Constants
from ghupdater.models import ArchiveSource, Source, VcsSource
from ghupdater.repository.url_normalize import is_github_url

FALLBACK_TEMPLATE = 10


@dataclass(frozen=True)
class UrlTemplate:
    """One URL layout: builds the version-bearing URL suffix.

    ``suffix(version, ext, package_name, repo_name)`` returns the tail the
    URL must end with.
    """
    number: int
    layout: str
    suffix: Callable[[str, str, str, str], str]
    needs_extension: bool = True


# Checked in order; the first exact suffix match wins.
TEMPLATES: Tuple[UrlTemplate, ...] = (
    UrlTemplate(1, "tarball/v<version>",
                lambda v, ext, name, repo: f"/tarball/v{v}", needs_extension=False),
    UrlTemplate(2, "tarball/<version>",
                lambda v, ext, name, repo: f"/tarball/{v}", needs_extension=False),
    UrlTemplate(3, "archive/v<version><ext>",
                lambda v, ext, name, repo: f"/archive/v{v}{ext}"),
    UrlTemplate(4, "archive/<version><ext>",
                lambda v, ext, name, repo: f"/archive/{v}{ext}"),
    UrlTemplate(5, "archive/<name>-<version><ext>",
                lambda v, ext, name, repo: f"/archive/{name}-{v}{ext}"),
    UrlTemplate(6, "releases/download/v<version>/<name>-<version><ext>",
                lambda v, ext, name, repo: f"/releases/download/v{v}/{name}-{v}{ext}"),
    UrlTemplate(7, "releases/download/<version>/<name>-<version><ext>",
                lambda v, ext, name, repo: f"/releases/download/{v}/{name}-{v}{ext}"),
    UrlTemplate(8, "releases/download/<version>/<repo>-<version><ext>",
                lambda v, ext, name, repo: f"/releases/download/{v}/{repo}-{v}{ext}"),
    UrlTemplate(9, "releases/download/<repo>-<version>/<repo>-<version><ext>",
                lambda v, ext, name, repo: f"/releases/download/{repo}-{v}/{repo}-{v}{ext}"),
)


def archive_extension(url: str) -> str:
    """Return the recognized archive extension of ``url`` or ''."""
    for ext in Constants.ARCHIVE_EXTENSIONS:
        if url.endswith(ext):
            return ext
    return ""


def _fallback_matches(url: str, package_name: str, version: str, ext: str) -> bool:
    pattern = (
        r"/releases/download/(v)?" + re.escape(version)
        + "/" + re.escape(package_name) + r".*" + re.escape(ext) + "$"
    )
    return re.search(pattern, url) is not None


def _match(
    url: str, package_name: str, version: str, repo_name: str
) -> Tuple[Optional[UrlTemplate], Optional[int], str]:
    """Find the layout ``url`` follows for ``version``.

    Returns (template, template_number, ext); template is None for the
    fallback layout and both are None when nothing matched.
    """
    if not version or not is_github_url(url):
        return None, None, ""
    ext = archive_extension(url)
    for template in TEMPLATES:
        if template.needs_extension and not ext:
            continue
        if url.endswith(template.suffix(version, ext, package_name, repo_name)):
            return template, template.number, ext
    if ext and _fallback_matches(url, package_name, version, ext):
        return None, FALLBACK_TEMPLATE, ext
    return None, None, ext


def identify_template(url: str, package_name: str, version: str, repo_name: str) -> Optional[int]:
    """Number (1-10) of the layout ``url`` follows for ``version``, or None."""
    return _match(url, package_name, version, repo_name)[1]


def rewrite_url(
    old_url: str, package_name: str, old_version: str, repo_name: str, new_version: str
) -> Optional[str]:
    """Compute the download URL of ``new_version`` from the one of ``old_version``.

    Args:
        old_url: Current download URL
        package_name: Canonical package name
        old_version: Version ``old_url`` points at
        repo_name: Repository slug from the URL path
        new_version: Version to point at

    Returns:
        The rewritten URL, or None when ``old_url`` is not on GitHub or
        follows no known layout.
    """
    template, number, ext = _match(old_url, package_name, old_version, repo_name)
    if number is None:
        return None
    if template is None:
        return old_url.replace(old_version, new_version)
    old_suffix = template.suffix(old_version, ext, package_name, repo_name)
    new_suffix = template.suffix(new_version, ext, package_name, repo_name)
    return old_url[:-len(old_suffix)] + new_suffix


def rewrite_source(
    source: Source, package_name: str, old_version: str, repo_name: str, new_version: str
) -> Optional[str]:
    """Rewrite the first applicable location of ``source``.

    Mirror lists are tried in order and the first successful rewrite wins.
    A GitHub VCS URL is returned unchanged since only its ref moves.
    """
    if isinstance(source, VcsSource):
        return source.url if is_github_url(source.url) else None
    if isinstance(source, ArchiveSource):
        for uri in source.uris:
            new_url = rewrite_url(uri, package_name, old_version, repo_name, new_version)
            if new_url is not None:
                return new_url
    return None
