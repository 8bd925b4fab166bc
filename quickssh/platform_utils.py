"""Platform-related utility functions."""

import logging
import os
import platform

APP_NAME = "quickssh"
STORE_FILENAME = "hosts.toml"
LEGACY_STORE_FILENAME = ".mysshconfig.toml"

logger = logging.getLogger(__name__)


def _normalize_path(path: str) -> str:
    """Expand user references and return an absolute path."""
    return os.path.abspath(os.path.expanduser(path))


def is_windows() -> bool:
    """Return True if running on Windows."""
    return platform.system() == "Windows"


def get_config_dir() -> str:
    """Return the per-user configuration directory for quickssh.

    On Windows this lives under ``%LOCALAPPDATA%``; elsewhere
    ``$XDG_CONFIG_HOME`` is honoured. An empty string means no platform
    directory is available and callers should use the working directory.
    """
    if is_windows():
        local_app_data = os.environ.get("LOCALAPPDATA", "").strip()
        if local_app_data:
            return os.path.join(_normalize_path(local_app_data), APP_NAME)
        logger.debug("LOCALAPPDATA is not set; falling back to the working directory")

    xdg_config = os.environ.get("XDG_CONFIG_HOME", "").strip()
    if xdg_config:
        return os.path.join(_normalize_path(xdg_config), APP_NAME)
    return ""


def get_store_path() -> str:
    """Return the path of the TOML file holding the host list.

    ``QUICKSSH_STORE`` overrides everything. Without a platform config
    directory the store is ``.mysshconfig.toml`` in the current working
    directory.
    """
    override = os.environ.get("QUICKSSH_STORE")
    if override:
        return _normalize_path(override)

    config_dir = get_config_dir()
    if config_dir:
        return os.path.join(config_dir, STORE_FILENAME)
    return os.path.join(os.getcwd(), LEGACY_STORE_FILENAME)


def ensure_parent_dir(path: str) -> str:
    """Create the directory holding *path* if it is missing."""
    parent = os.path.dirname(os.path.abspath(path))
    if parent:
        os.makedirs(parent, exist_ok=True)
    return parent
