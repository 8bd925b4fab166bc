"""Import host shortcuts from an OpenSSH client config file.

Only concrete ``Host`` aliases are imported; wildcard and negated patterns
are skipped. Values are resolved through :meth:`paramiko.SSHConfig.lookup`
so ``Host *`` defaults apply to each alias the same way ``ssh`` would see
them.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, List

from paramiko.config import SSHConfig
from paramiko.ssh_exception import ConfigParseError

from .hosts import HostRecord

logger = logging.getLogger(__name__)

IMPORT_TAG = "ssh-config"


class SshConfigImportError(Exception):
    """Raised when the OpenSSH config cannot be read or parsed."""


def _is_concrete_alias(alias: str) -> bool:
    return bool(alias) and not any(token in alias for token in ("*", "?", "!"))


def read_ssh_config_hosts(path: str) -> List[HostRecord]:
    """Return one :class:`HostRecord` per concrete alias in *path*, sorted by alias."""
    if not os.path.exists(path):
        raise SshConfigImportError(f"SSH config not found: {path}")
    try:
        config = SSHConfig.from_path(path)
    except (OSError, ConfigParseError) as exc:
        raise SshConfigImportError(f"Failed to parse {path}: {exc}") from exc

    records: List[HostRecord] = []
    for alias in sorted(config.get_hostnames(), key=str.lower):
        if not _is_concrete_alias(alias):
            continue
        options = config.lookup(alias)
        records.append(
            HostRecord(
                host=alias,
                hostname=options.get("hostname", alias),
                user=options.get("user", ""),
                forward_agent=str(options.get("forwardagent", "no")).lower() == "yes",
                tags=[IMPORT_TAG],
                description=f"Imported from {os.path.basename(path)}",
            )
        )
    logger.debug("Found %d concrete host(s) in %s", len(records), path)
    return records


def new_hosts_from_ssh_config(path: str, existing: Iterable[HostRecord]) -> List[HostRecord]:
    """Return the hosts from *path* whose alias is not already in *existing*."""
    known = {record.host for record in existing}
    fresh = [record for record in read_ssh_config_hosts(path) if record.host not in known]
    logger.info("Importing %d new host(s) from %s", len(fresh), path)
    return fresh


__all__ = ["SshConfigImportError", "new_hosts_from_ssh_config", "read_ssh_config_hosts"]
