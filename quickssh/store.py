"""
TOML-backed persistence for the host list.

The whole list is read at startup and rewritten in full on every save.
There is no merge step: the last writer wins.
"""

from __future__ import annotations

import logging
import tomllib
from typing import Any, Dict, List, Optional

import tomli_w

from .hosts import HostRecord
from .platform_utils import ensure_parent_dir, get_store_path

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the host store cannot be read or written."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class HostStore:
    """Loads and saves :class:`HostRecord` lists at a fixed path."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or get_store_path()

    def load(self) -> List[HostRecord]:
        """Return the stored hosts in file order.

        Raises :class:`StoreError` when the file is missing, unreadable or
        not a valid host table.
        """
        try:
            with open(self.path, "rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError as exc:
            raise StoreError(f"No host file at {self.path}", self.path) from exc
        except tomllib.TOMLDecodeError as exc:
            raise StoreError(f"Malformed host file {self.path}: {exc}", self.path) from exc
        except OSError as exc:
            raise StoreError(f"Cannot read {self.path}: {exc}", self.path) from exc

        raw_hosts = data.get("hosts", [])
        if not isinstance(raw_hosts, list):
            raise StoreError(f"'hosts' in {self.path} must be an array of tables", self.path)

        records: List[HostRecord] = []
        for entry in raw_hosts:
            if not isinstance(entry, dict):
                raise StoreError(f"Unexpected host entry in {self.path}: {entry!r}", self.path)
            records.append(HostRecord.from_dict(entry))
        logger.debug("Loaded %d host(s) from %s", len(records), self.path)
        return records

    def save(self, records: List[HostRecord]) -> None:
        """Overwrite the store with *records*."""
        payload: Dict[str, Any] = {"hosts": [record.to_dict() for record in records]}
        try:
            ensure_parent_dir(self.path)
            with open(self.path, "wb") as f:
                tomli_w.dump(payload, f)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to save hosts to %s: %s", self.path, exc)
            raise StoreError(f"Cannot write {self.path}: {exc}", self.path) from exc
        logger.info("Saved %d host(s) to %s", len(records), self.path)


__all__ = ["HostStore", "StoreError"]
