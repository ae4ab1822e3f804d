"""ghupdater - release discovery and source URL rewriting for GitHub-hosted packages."""

from ghupdater.updater import GITHUB_UPDATER, is_github_package, propose_update

__all__ = ["GITHUB_UPDATER", "is_github_package", "propose_update"]
