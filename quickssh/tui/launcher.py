"""
Hand-off from the TUI to the system ``ssh`` client.

The Textual application must have exited before :func:`launch_session` runs
so the child process owns the terminal. quickssh does not resume after the
session ends.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from typing import List, Optional, TextIO

from quickssh.hosts import HostRecord

LOG = logging.getLogger(__name__)


def build_connect_argument(record: HostRecord) -> str:
    """Return ``user@hostname`` for *record*; empty parts are passed through as-is."""
    return f"{record.user}@{record.hostname}"


def build_ssh_command(record: HostRecord, ssh_command: str = "ssh") -> List[str]:
    return [ssh_command, build_connect_argument(record)]


def launch_session(record: HostRecord, ssh_command: str = "ssh", *, stderr: Optional[TextIO] = None) -> int:
    """Run ``ssh`` for *record* with the inherited standard streams.

    Returns the child's exit code, or -1 if it could not be started. Failures
    are reported on *stderr* and never raised.
    """
    err = stderr or sys.stderr
    cmd = build_ssh_command(record, ssh_command)
    LOG.info("Launching %s", " ".join(shlex.quote(part) for part in cmd))
    try:
        rc = subprocess.run(cmd).returncode
    except FileNotFoundError:
        LOG.error("%s executable was not found on PATH", ssh_command)
        print(f"{ssh_command} executable was not found on PATH.", file=err)
        return -1
    except OSError as exc:
        LOG.exception("Failed to start %s", ssh_command)
        print(f"Connection failed: {exc}", file=err)
        return -1

    if rc != 0:
        LOG.warning("%s exited with code %s", ssh_command, rc)
        print(f"{ssh_command} exited with code {rc}", file=err)
    return rc


__all__ = ["build_connect_argument", "build_ssh_command", "launch_session"]
