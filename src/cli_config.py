"""Runtime configuration overrides for endpoints and the launcher executable.

Loads an optional YAML file and environment variables into ``Constants``.
Configuration problems are logged and never break the CLI.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

# YAML key -> (Constants attribute, converter)
_CONFIG_KEYS = {
    "github_api_base": ("GITHUB_API_BASE", str),
    "scala_repo": ("SCALA_REPO", str),
    "community_build_raw_base": ("COMMUNITY_BUILD_RAW_BASE", str),
    "pr_validation_repo": ("PR_VALIDATION_REPO", str),
    "integration_repo": ("INTEGRATION_REPO", str),
    "coursier": ("COURSIER", str),
    "request_timeout": ("REQUEST_TIMEOUT", int),
}


def config_path() -> str:
    """Return the config file location, honoring SCALA_RUNNER_CONFIG."""
    return os.path.expanduser(os.environ.get(Constants.ENV_CONFIG) or Constants.DEFAULT_CONFIG_PATH)


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """Read the YAML config file, returning {} when absent or unreadable."""
    path = path or config_path()
    if not os.path.isfile(path):
        logger.debug("No config file at %s", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not a mapping", path)
        return {}
    return data


def apply_config(data: Dict[str, Any]) -> None:
    """Apply recognised keys from a config mapping onto Constants."""
    for key, value in data.items():
        target = _CONFIG_KEYS.get(key)
        if target is None:
            logger.warning("Unknown config key: %s", key)
            continue
        attr, convert = target
        try:
            setattr(Constants, attr, convert(value))
        except (TypeError, ValueError):
            logger.warning("Invalid value for config key %s: %r", key, value)


def apply_env_overrides() -> None:
    """Environment variables win over the config file."""
    coursier = os.environ.get(Constants.ENV_COURSIER)
    if coursier and coursier.strip():
        Constants.COURSIER = coursier.strip()


def load_runtime_config(path: Optional[str] = None) -> None:
    """Load file then environment overrides, in precedence order."""
    apply_config(load_config_file(path))
    apply_env_overrides()
