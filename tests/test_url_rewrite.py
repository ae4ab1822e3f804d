"""Tests for download URL rewriting."""

import pytest

from ghupdater.models import ArchiveSource, VcsSource
from ghupdater.repository.url_rewrite import (
    archive_extension,
    identify_template,
    rewrite_source,
    rewrite_url,
)

# (url, package_name, old_version, repo_name, template_number)
LAYOUTS = [
    ("https://github.com/o/r/tarball/v1.0", "pkg", "1.0", "r", 1),
    ("https://github.com/o/r/tarball/1.0", "pkg", "1.0", "r", 2),
    ("https://github.com/arq5x/bedtools2/archive/v2.24.0.tar.gz", "bedtools2", "2.24.0", "bedtools2", 3),
    ("https://github.com/o/r/archive/1.0.zip", "pkg", "1.0", "r", 4),
    ("https://github.com/o/proj/archive/pkg-1.0.tar.bz2", "pkg", "1.0", "proj", 5),
    ("https://github.com/o/r/releases/download/v1.0/pkg-1.0.tar.xz", "pkg", "1.0", "r", 6),
    ("https://github.com/o/r/releases/download/1.0/pkg-1.0.tgz", "pkg", "1.0", "r", 7),
    ("https://github.com/o/repo/releases/download/1.0/repo-1.0.tar.gz", "pkg", "1.0", "repo", 8),
    ("https://github.com/o/repo/releases/download/repo-1.0/repo-1.0.tar", "pkg", "1.0", "repo", 9),
    ("https://github.com/o/r/releases/download/v1.0/pkg_linux-1.0.zip", "pkg", "1.0", "r", 10),
]


class TestRewriteUrl:
    """Test each URL layout."""

    def test_archive_v_prefix(self):
        """bedtools2 archive URL moves to the new version."""
        new = rewrite_url(
            "https://github.com/arq5x/bedtools2/archive/v2.24.0.tar.gz",
            "bedtools2", "2.24.0", "bedtools2", "2.25.0",
        )
        assert new == "https://github.com/arq5x/bedtools2/archive/v2.25.0.tar.gz"

    @pytest.mark.parametrize("url,name,old,repo,expected", [
        ("https://github.com/o/r/tarball/v1.0", "pkg", "1.0", "r",
         "https://github.com/o/r/tarball/v2.0"),
        ("https://github.com/o/r/tarball/1.0", "pkg", "1.0", "r",
         "https://github.com/o/r/tarball/2.0"),
        ("https://github.com/o/r/archive/1.0.zip", "pkg", "1.0", "r",
         "https://github.com/o/r/archive/2.0.zip"),
        ("https://github.com/o/proj/archive/pkg-1.0.tar.bz2", "pkg", "1.0", "proj",
         "https://github.com/o/proj/archive/pkg-2.0.tar.bz2"),
        ("https://github.com/o/r/releases/download/v1.0/pkg-1.0.tar.xz", "pkg", "1.0", "r",
         "https://github.com/o/r/releases/download/v2.0/pkg-2.0.tar.xz"),
        ("https://github.com/o/r/releases/download/1.0/pkg-1.0.tgz", "pkg", "1.0", "r",
         "https://github.com/o/r/releases/download/2.0/pkg-2.0.tgz"),
        ("https://github.com/o/repo/releases/download/1.0/repo-1.0.tar.gz", "pkg", "1.0", "repo",
         "https://github.com/o/repo/releases/download/2.0/repo-2.0.tar.gz"),
        ("https://github.com/o/repo/releases/download/repo-1.0/repo-1.0.tar", "pkg", "1.0", "repo",
         "https://github.com/o/repo/releases/download/repo-2.0/repo-2.0.tar"),
        ("https://github.com/o/game/archive/v1.0.love", "game", "1.0", "game",
         "https://github.com/o/game/archive/v2.0.love"),
        ("https://github.com/o/r/releases/download/v1.0/pkg-1.0.tbz", "pkg", "1.0", "r",
         "https://github.com/o/r/releases/download/v2.0/pkg-2.0.tbz"),
    ])
    def test_layouts(self, url, name, old, repo, expected):
        """Each strict layout substitutes the version in place."""
        assert rewrite_url(url, name, old, repo, "2.0") == expected

    def test_fallback_replaces_every_occurrence(self):
        """Loose release-asset layout replaces the version globally."""
        new = rewrite_url(
            "https://github.com/o/r/releases/download/v1.0/pkg_linux-1.0.zip", "pkg", "1.0", "r", "2.0"
        )
        assert new == "https://github.com/o/r/releases/download/v2.0/pkg_linux-2.0.zip"

    def test_not_github(self):
        """Foreign hosts are not applicable."""
        assert rewrite_url("https://example.org/o/r/archive/v1.0.tar.gz", "r", "1.0", "r", "2.0") is None

    def test_unknown_extension(self):
        """'.rar' defeats every extension-based layout, fallback included."""
        url = "https://github.com/o/r/releases/download/v1.0/pkg-1.0.rar"
        assert rewrite_url(url, "pkg", "1.0", "r", "2.0") is None
        assert identify_template(url, "pkg", "1.0", "r") is None

    def test_version_mismatch(self):
        """Old version absent from the URL means no layout matched."""
        url = "https://github.com/o/r/archive/v1.0.tar.gz"
        assert rewrite_url(url, "r", "1.1", "r", "2.0") is None

    def test_empty_old_version(self):
        """An empty old version never matches."""
        assert rewrite_url("https://github.com/o/r/tarball/v", "r", "", "r", "2.0") is None

    def test_extension_detection_prefers_compound(self):
        """.tar.gz is recognized whole, not as .gz."""
        assert archive_extension("https://github.com/o/r/archive/1.0.tar.gz") == ".tar.gz"
        assert archive_extension("https://github.com/o/r/archive/1.0.tar.bz2") == ".tar.bz2"
        assert archive_extension("https://github.com/o/r/archive/1.0.tar.xz") == ".tar.xz"
        assert archive_extension("https://github.com/o/r/archive/1.0.gz") == ""


class TestTemplateStability:
    """Rewriting keeps the URL shape and is idempotent."""

    @pytest.mark.parametrize("url,name,old,repo,number", LAYOUTS)
    def test_identify(self, url, name, old, repo, number):
        """Each sample URL maps to its expected layout."""
        assert identify_template(url, name, old, repo) == number

    @pytest.mark.parametrize("url,name,old,repo,number", LAYOUTS)
    def test_shape_preserved(self, url, name, old, repo, number):
        """The rewritten URL follows the same layout for the new version."""
        new = rewrite_url(url, name, old, repo, "9.9.9")
        assert identify_template(new, name, "9.9.9", repo) == number

    @pytest.mark.parametrize("url,name,old,repo,number", LAYOUTS)
    def test_idempotent(self, url, name, old, repo, number):
        """Rewriting to the same version again changes nothing."""
        new = rewrite_url(url, name, old, repo, "9.9.9")
        assert rewrite_url(new, name, "9.9.9", repo, "9.9.9") == new


class TestRewriteSource:
    """Test mirror lists and VCS sources."""

    def test_first_rewritable_mirror_wins(self):
        """Non-GitHub mirrors are skipped."""
        source = ArchiveSource([
            "https://mirror.example.org/pkg-1.0.tar.gz",
            "https://github.com/o/pkg/archive/v1.0.tar.gz",
            "https://github.com/o/pkg/archive/1.0.tar.gz",
        ])
        assert rewrite_source(source, "pkg", "1.0", "pkg", "1.1") == \
            "https://github.com/o/pkg/archive/v1.1.tar.gz"

    def test_no_mirror_applicable(self):
        """All mirrors failing gives None."""
        source = ArchiveSource(["https://mirror.example.org/pkg-1.0.tar.gz"])
        assert rewrite_source(source, "pkg", "1.0", "pkg", "1.1") is None

    def test_single_string_uri(self):
        """A bare string is accepted as a one-element mirror list."""
        source = ArchiveSource("https://github.com/o/pkg/tarball/1.0")
        assert source.uris == ("https://github.com/o/pkg/tarball/1.0",)
        assert rewrite_source(source, "pkg", "1.0", "pkg", "1.1") == "https://github.com/o/pkg/tarball/1.1"

    def test_vcs_url_unchanged(self):
        """GitHub VCS URLs are returned as is, whatever the version."""
        source = VcsSource("https://github.com/o/pkg.git", "v1.0")
        assert rewrite_source(source, "pkg", "1.0", "pkg", "7.0") == "https://github.com/o/pkg.git"

    def test_vcs_url_elsewhere(self):
        """Non-GitHub VCS URLs are not applicable."""
        source = VcsSource("https://git.example.org/pkg.git", "v1.0")
        assert rewrite_source(source, "pkg", "1.0", "pkg", "7.0") is None
