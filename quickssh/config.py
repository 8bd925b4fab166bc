"""
Configuration for quickssh
Handles application settings and the colour theme handed to the TUI
"""

import copy
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .platform_utils import get_store_path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


@dataclass(frozen=True)
class Theme:
    """Colours and spacing used by the Textual front-end."""

    title_foreground: str = "#FFFDF5"
    title_background: str = "#25A065"
    status_foreground: str = "#04B575"
    padding: Tuple[int, int] = (1, 2)

    def frame_size(self) -> Tuple[int, int]:
        """Return the horizontal and vertical space taken by the padding."""
        vertical, horizontal = self.padding
        return horizontal * 2, vertical * 2


class Config:
    """Settings manager for quickssh.

    Values come from ``config.json`` stored next to the host file and are
    merged over :meth:`get_default_config`. A missing or malformed file is
    not an error; the defaults apply.
    """

    def __init__(self, config_file: Optional[str] = None):
        if config_file is None:
            config_file = os.path.join(os.path.dirname(get_store_path()), CONFIG_FILENAME)
        self.config_file = config_file
        self.config_data = self.load_json_config()

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Get default configuration values"""
        return {
            'store': {
                'auto_save': True,
            },
            'ui': {
                'status_timeout': 3.0,
                'demo_hosts': False,
            },
            'ssh': {
                'command': 'ssh',
                'config_path': '~/.ssh/config',
            },
        }

    def load_json_config(self) -> Dict[str, Any]:
        """Load configuration from JSON file"""
        config = self.get_default_config()
        if not os.path.exists(self.config_file):
            return config
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load JSON config: {e}")
            return config

        if not isinstance(stored, dict):
            logger.warning("Ignoring %s: top level must be an object", self.config_file)
            return config
        self._merge(config, stored)
        return config

    @classmethod
    def _merge(cls, base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                cls._merge(base[key], value)
            else:
                base[key] = copy.deepcopy(value)

    def get_setting(self, key: str, default=None):
        """Get a setting value using a dotted key such as ``ui.status_timeout``."""
        value: Any = self.config_data
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set_setting(self, key: str, value: Any):
        """Set a setting value for the running session."""
        keys = key.split('.')
        target = self.config_data
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value

    # --- Typed accessors --------------------------------------------------

    @property
    def auto_save(self) -> bool:
        return bool(self.get_setting('store.auto_save', True))

    @property
    def status_timeout(self) -> float:
        try:
            return float(self.get_setting('ui.status_timeout', 3.0))
        except (TypeError, ValueError):
            return 3.0

    @property
    def demo_hosts(self) -> bool:
        return bool(self.get_setting('ui.demo_hosts', False))

    @property
    def ssh_command(self) -> str:
        return str(self.get_setting('ssh.command', 'ssh') or 'ssh')

    @property
    def ssh_config_path(self) -> str:
        path = str(self.get_setting('ssh.config_path', '~/.ssh/config') or '~/.ssh/config')
        return os.path.abspath(os.path.expanduser(path))


__all__ = ["Config", "Theme"]
