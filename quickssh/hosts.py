"""Host records managed by quickssh.

A :class:`HostRecord` is the persisted shape of one SSH shortcut. It carries
no presentation logic; the TUI wraps records in
:class:`quickssh.tui.navigator.HostListItem` for display.
"""

from __future__ import annotations

import random
import string
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class HostRecord:
    """One named SSH connection target."""

    host: str
    hostname: str = ""
    user: str = ""
    forward_agent: bool = False
    tags: List[str] = field(default_factory=list)
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HostRecord":
        """Build a record from a decoded store table, filling in missing keys."""
        tags = data.get("tags") or []
        if isinstance(tags, str):
            tags = [tags]
        return cls(
            host=str(data.get("host", "") or ""),
            hostname=str(data.get("hostname", "") or ""),
            user=str(data.get("user", "") or ""),
            forward_agent=bool(data.get("forward_agent", False)),
            tags=[str(tag) for tag in tags],
            description=str(data.get("description", "") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["tags"] = list(self.tags)
        return data


def find_host(records: List[HostRecord], host: str) -> Optional[int]:
    """Return the index of the first record whose identity is *host*."""
    for idx, record in enumerate(records):
        if record.host == host:
            return idx
    return None


def generate_random_host(rng: Optional[random.Random] = None) -> HostRecord:
    """Return a throwaway record used by the demo insert command."""
    rng = rng or random.Random()
    suffix = "".join(rng.choice(string.ascii_lowercase + string.digits) for _ in range(6))
    octets = ".".join(str(rng.randint(1, 254)) for _ in range(4))
    return HostRecord(
        host=f"demo-{suffix}",
        hostname=octets,
        user=rng.choice(["root", "admin", "deploy", "ubuntu"]),
        forward_agent=True,
        tags=[],
        description=f"Generated host {rng.randint(0, 99)}",
    )


__all__ = ["HostRecord", "find_host", "generate_random_host"]
