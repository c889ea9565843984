"""Server configuration.

Reads the ``sp_api:`` section of ``args/sp_api_config.yaml`` over the
in-code defaults below, then applies environment overrides. A missing or
malformed file is not fatal: the defaults are complete on their own.

Usage:
    from spapi_mcp.config import load_config
    config = load_config()
    config["request_timeout_seconds"]  # 30
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from spapi_mcp import __version__

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = BASE_DIR / "args" / "sp_api_config.yaml"

logger = logging.getLogger("spapi.config")

NA_BASE_URL = "https://sellingpartnerapi-na.amazon.com"

_DEFAULTS: Dict[str, Any] = {
    "default_base_url": NA_BASE_URL,
    "token_endpoint": "https://api.amazon.com/auth/o2/token",
    "request_timeout_seconds": 30,
    "token_expiry_margin_seconds": 300,
    "user_agent": f"SP-API-Dev-MCP/{__version__}",
    "default_marketplace_id": "ATVPDKIKX0DER",
    "log_level": "INFO",
    "regions": {
        "na": NA_BASE_URL,
        "eu": "https://sellingpartnerapi-eu.amazon.com",
        "fe": "https://sellingpartnerapi-fe.amazon.com",
        "north_america": NA_BASE_URL,
        "europe": "https://sellingpartnerapi-eu.amazon.com",
        "far_east": "https://sellingpartnerapi-fe.amazon.com",
    },
}


def default_config() -> Dict[str, Any]:
    """Return a fresh copy of the built-in defaults."""
    return copy.deepcopy(_DEFAULTS)


def _read_yaml_section(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Could not read config %s: %s (using defaults)", path, exc)
        return {}
    section = data.get("sp_api") if isinstance(data, dict) else None
    if not isinstance(section, dict):
        logger.warning("Config %s has no 'sp_api' mapping (using defaults)", path)
        return {}
    return section


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the effective server configuration.

    Args:
        path: Optional YAML path. Defaults to ``SP_API_CONFIG_PATH`` or
              ``args/sp_api_config.yaml``.

    Returns:
        Dict of configuration values (see ``_DEFAULTS`` for the keys).
    """
    config = default_config()

    if path is None:
        env_path = os.environ.get("SP_API_CONFIG_PATH")
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    section = _read_yaml_section(Path(path))
    regions = section.pop("regions", None)
    config.update(section)
    if isinstance(regions, dict):
        config["regions"].update({str(k).lower(): v for k, v in regions.items()})

    log_level = os.environ.get("SP_API_LOG_LEVEL")
    if log_level:
        config["log_level"] = log_level.upper()

    return config
