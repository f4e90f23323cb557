"""Configuration and credential handling for linctl."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import orjson

from linctl.api import AuthenticationError
from linctl.constants import (
    API_KEY_ENV,
    API_URL_ENV,
    CONFIG_DIRNAME,
    CONFIG_FILENAME,
    CONFIG_PATH_ENV,
    DEFAULT_TREE_DEPTH,
    LEGACY_AUTH_FILENAME,
    LINEAR_API_URL,
)


def get_config_path() -> Path:
    """Get the path to the config file.

    Precedence: ``$LINCTL_CONFIG``, then
    ``$XDG_CONFIG_HOME/linctl/config.toml``, then
    ``~/.config/linctl/config.toml``.
    """
    explicit = os.environ.get(CONFIG_PATH_ENV)
    if explicit:
        return Path(explicit).expanduser()

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / CONFIG_DIRNAME / CONFIG_FILENAME


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from config.toml.

    Returns:
        Configuration dictionary, or empty dict if no usable config exists
    """
    path = config_path or get_config_path()
    if not path.exists():
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        logging.getLogger(__name__).warning(
            "Ignoring unreadable config %s: %s",
            path,
            e,
        )
        return {}


def load_legacy_auth(home: Path | None = None) -> dict[str, Any]:
    """Load credentials from the legacy ``~/.linctl-auth.json`` file."""
    path = (home or Path.home()) / LEGACY_AUTH_FILENAME
    if not path.is_file():
        return {}

    try:
        data = orjson.loads(path.read_bytes())
    except (orjson.JSONDecodeError, OSError) as e:
        logging.getLogger(__name__).warning("Ignoring unreadable %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _header_from(source: dict[str, Any]) -> str | None:
    if source.get("api_key"):
        return str(source["api_key"])
    if source.get("access_token"):
        return f"Bearer {source['access_token']}"
    return None


def get_auth_header(config: dict[str, Any] | None = None) -> str:
    """Get the Authorization header value.

    Precedence:
    1. ``$LINEAR_API_KEY``
    2. ``api_key`` / ``access_token`` from config.toml
    3. ``api_key`` / ``access_token`` from the legacy auth file

    Raises:
        AuthenticationError: If no credentials are configured
    """
    env_key = os.environ.get(API_KEY_ENV)
    if env_key:
        return env_key

    header = _header_from(load_config() if config is None else config)
    if header:
        return header

    header = _header_from(load_legacy_auth())
    if header:
        return header

    msg = (
        f"Not authenticated. Set {API_KEY_ENV} or add api_key to "
        f"{get_config_path()}."
    )
    raise AuthenticationError(msg)


def get_api_url(config: dict[str, Any] | None = None) -> str:
    """Get the GraphQL endpoint, honoring ``$LINEAR_API_URL`` and config."""
    env_url = os.environ.get(API_URL_ENV)
    if env_url:
        return env_url
    cfg = load_config() if config is None else config
    return str(cfg.get("api_url") or LINEAR_API_URL)


def get_default_depth(config: dict[str, Any] | None = None) -> int:
    """Get the default tree depth from config, falling back to 3."""
    cfg = load_config() if config is None else config
    depth = cfg.get("default_depth")
    if isinstance(depth, int) and not isinstance(depth, bool) and depth >= 0:
        return depth
    return DEFAULT_TREE_DEPTH
