"""Constants used in the project."""

import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    TAG_PREFIX = "v"
    BUILD_IDENTIFIER = "build"
    BRANCH_SEPARATOR = "/"
    LOG_FORMAT = "[%(levelname)s] %(message)s"

    # Tag checker discipline (applied by GuardedTagChecker only)
    TAG_CHECK_TIMEOUT_SEC = 30
    TAG_CHECK_RETRY_MAX = 3
    TAG_CHECK_RETRY_BASE_DELAY_SEC = 0.3

    # Environment
    ENV_CONFIG_PATH = "GITFLOW_VERSION_CONFIG"
    ENV_LOG_LEVEL = "GITFLOW_LOG_LEVEL"
    DEFAULT_CONFIG_PATHS = [
        "gitflow-version.yml",
        "gitflow-version.yaml",
        os.path.join("~", ".config", "gitflow-version", "config.yml"),
    ]


def _candidate_config_paths(path: Optional[str] = None):
    """Yield config file locations in priority order."""
    if path:
        yield path
        return
    env_path = os.environ.get(Constants.ENV_CONFIG_PATH)
    if env_path and env_path.strip():
        yield env_path.strip()
    for default in Constants.DEFAULT_CONFIG_PATHS:
        yield os.path.expanduser(default)


def _load_yaml_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load the first readable YAML config file.

    Args:
        path: Explicit config path; when given, default locations are skipped.

    Returns:
        Parsed mapping, or an empty dict when nothing usable was found.
    """
    import yaml  # pylint: disable=import-outside-toplevel

    for candidate in _candidate_config_paths(path):
        if not os.path.isfile(candidate):
            if path:
                logger.warning("Config file not found: %s", candidate)
            continue
        try:
            with open(candidate, "r", encoding="utf-8") as fh:
                data = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load config %s: %s", candidate, e)
            return {}
        if isinstance(data, dict):
            return data
        logger.warning("Ignoring config %s: top level is not a mapping", candidate)
        return {}
    return {}


def apply_config(cfg: Dict[str, Any]) -> None:
    """Apply ``versioning`` and ``tags`` sections of a config mapping onto Constants.

    Unknown keys and values of the wrong type are ignored with a warning.
    """
    versioning = cfg.get("versioning") or {}
    tags = cfg.get("tags") or {}
    if not isinstance(versioning, dict) or not isinstance(tags, dict):
        logger.warning("Ignoring config: 'versioning' and 'tags' must be mappings")
        return

    overrides = {
        "TAG_PREFIX": (tags.get("prefix"), str),
        "BUILD_IDENTIFIER": (versioning.get("build_identifier"), str),
        "TAG_CHECK_TIMEOUT_SEC": (tags.get("timeout_sec"), (int, float)),
        "TAG_CHECK_RETRY_MAX": (tags.get("retry_max"), int),
        "TAG_CHECK_RETRY_BASE_DELAY_SEC": (tags.get("retry_base_delay_sec"), (int, float)),
    }
    for attr, (value, expected) in overrides.items():
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, expected):
            logger.warning("Ignoring config value for %s: %r", attr, value)
            continue
        setattr(Constants, attr, value)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load YAML config from ``path`` or default locations and apply it."""
    cfg = _load_yaml_config(path)
    if cfg:
        apply_config(cfg)
    return cfg
