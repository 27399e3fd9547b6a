from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

from ..errors import ConfigError
from ..utils.time import DEFAULT_TIMEZONE

DEFAULT_CONFIG_PATH = Path("wpdocs.config.yaml")

DEFAULT_UPLOADS_BASE_URL = "http://docs.istat.it/www/wp-content/uploads"

BASE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "database": {
        "url": None,
        "echo": False,
    },
    "site": {
        "timezone": DEFAULT_TIMEZONE,
    },
    "uploads": {
        "base_url": DEFAULT_UPLOADS_BASE_URL,
        "dir": None,
        "probe_http": False,
        "http_timeout_seconds": 5,
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge_defaults(config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay user sections on the built-in defaults, one level deep."""
    merged: Dict[str, Any] = deepcopy(BASE_DEFAULTS)
    for section, values in config.items():
        if section in merged:
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ConfigError(f"Config section '{section}' must be a dictionary")
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load the wpdocs configuration from YAML.

    Args:
        path: Optional path to the config file. Defaults to wpdocs.config.yaml

    Returns:
        Config dictionary with defaults applied

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the config structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError("Config must be a dictionary")

    config = _merge_defaults(raw)
    if not config["database"].get("url"):
        raise ConfigError("Config must have 'database.url' field")

    timeout = config["uploads"].get("http_timeout_seconds")
    if not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError("'uploads.http_timeout_seconds' must be a positive number")

    return config


def get_database_url(config: Dict[str, Any]) -> str:
    return config["database"]["url"]


def get_site_timezone_name(config: Dict[str, Any] | None = None) -> str:
    """Site timezone name; YYYYMMDD values in the store are local to it."""
    if not config:
        return DEFAULT_TIMEZONE
    return config.get("site", {}).get("timezone") or DEFAULT_TIMEZONE


def get_uploads_config(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """
    Get the uploads section with defaults applied.

    Args:
        config: Optional loaded config. If None, built-in defaults are used.

    Returns:
        Dict with base_url, dir, probe_http and http_timeout_seconds
    """
    uploads = deepcopy(BASE_DEFAULTS["uploads"])
    if config:
        uploads.update(config.get("uploads") or {})
    return uploads
