"""Constants used in the project."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "GHUPDATER_LOG_LEVEL"
    DEFAULT_LOG_LEVEL = "WARNING"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    # Repository API constants
    GITHUB_URL_PREFIX = "https://github.com/"
    GITHUB_API_BASE = "https://api.github.com"
    GITHUB_ACCEPT = "application/vnd.github.v3+json"
    USER_AGENT = "ghupdater/0.1"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    REPO_API_PER_PAGE = 100

    # Order matters: compound extensions first
    ARCHIVE_EXTENSIONS = (
        ".tar.gz",
        ".tar.bz2",
        ".tar.xz",
        ".zip",
        ".tar",
        ".tgz",
        ".tbz",
        ".love",
    )

    ENV_CONFIG = "GHUPDATER_CONFIG"
    DEFAULT_CONFIG_PATH = os.path.join("~", ".config", "ghupdater", "config.yml")


def _config_path() -> str:
    return os.path.expanduser(os.environ.get(Constants.ENV_CONFIG) or Constants.DEFAULT_CONFIG_PATH)


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Read the YAML config file, returning {} when absent or unusable."""
    path = path or _config_path()
    if not os.path.isfile(path):
        return {}
    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except OSError as exc:
        logger.debug("Ignoring unreadable config %s: %s", path, exc)
        return {}
    except yaml.YAMLError as exc:
        logger.debug("Ignoring malformed config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.debug("Ignoring config %s: top level is not a mapping", path)
        return {}
    return data


_GITHUB_KEYS = {
    "api_base": ("GITHUB_API_BASE", str),
    "user_agent": ("USER_AGENT", str),
    "request_timeout": ("REQUEST_TIMEOUT", int),
    "per_page": ("REPO_API_PER_PAGE", int),
    "token_env": ("ENV_GITHUB_TOKEN", str),
}


def apply_config(data: Dict[str, Any]) -> None:
    """Apply YAML overrides onto Constants. Unknown or invalid keys are skipped."""
    github = data.get("github") or {}
    if isinstance(github, dict):
        for key, (attr, conv) in _GITHUB_KEYS.items():
            if key not in github or github[key] is None:
                continue
            try:
                setattr(Constants, attr, conv(github[key]))
            except (TypeError, ValueError):
                logger.debug("Ignoring invalid config value github.%s=%r", key, github[key])
    log_cfg = data.get("logging") or {}
    if isinstance(log_cfg, dict) and log_cfg.get("level"):
        Constants.DEFAULT_LOG_LEVEL = str(log_cfg["level"]).upper()


apply_config(_load_yaml_config())
