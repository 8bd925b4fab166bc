"""
List navigation for the host TUI.

:class:`HostNavigator` keeps an ordered, optionally filtered view over the
host list together with the cursor, the filter-entry state and a transient
status line. It never touches the store; callers persist explicitly.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol

from quickssh.hosts import HostRecord, find_host

Clock = Callable[[], float]


class ListItem(Protocol):
    """What the list renderer needs from an entry."""

    @property
    def title(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def filter_value(self) -> str: ...


class HostListItem:
    """Presentation wrapper around a :class:`HostRecord`."""

    __slots__ = ("record",)

    def __init__(self, record: HostRecord):
        self.record = record

    @property
    def title(self) -> str:
        return self.record.host

    @property
    def description(self) -> str:
        parts = [self.record.description] if self.record.description else []
        if self.record.tags:
            parts.append(" ".join(f"#{tag}" for tag in self.record.tags))
        return "  ".join(parts)

    @property
    def filter_value(self) -> str:
        return " ".join([self.record.host, self.record.description, *self.record.tags])


@dataclass
class StatusMessage:
    text: str
    expires_at: float
    error: bool = False


class HostNavigator:
    """Cursor, filter and status state over a shared list of hosts.

    ``hosts`` is held by reference: inserts and removals made here are
    visible to whoever owns the list.
    """

    def __init__(self, hosts: List[HostRecord], *, status_timeout: float = 3.0, clock: Clock = time.monotonic):
        self.hosts = hosts
        self.status_timeout = status_timeout
        self._clock = clock
        self.filter_text = ""
        self.filtering = False
        self.cursor = 0
        self.scroll_offset = 0
        self._status: Optional[StatusMessage] = None
        self.visible: List[HostRecord] = []
        self._refresh()

    # ------------------------------------------------------------- projection
    @property
    def filter_applied(self) -> bool:
        return bool(self.filter_text) and not self.filtering

    def _matches(self, record: HostRecord) -> bool:
        if not self.filter_text:
            return True
        return self.filter_text.lower() in HostListItem(record).filter_value.lower()

    def _refresh(self, follow: Optional[HostRecord] = None) -> None:
        """Recompute the projection, keeping the cursor on *follow* if it is still visible."""
        self.visible = [record for record in self.hosts if self._matches(record)]
        if follow is not None:
            for idx, record in enumerate(self.visible):
                if record is follow:
                    self.cursor = idx
                    return
        self._clamp()

    def _clamp(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.visible) - 1))

    # --------------------------------------------------------------- mutation
    def insert(self, record: HostRecord, index: int = 0) -> None:
        """Insert *record* into the backing list at *index* (front by default)."""
        selected = self.current_selection()
        index = max(0, min(index, len(self.hosts)))
        self.hosts.insert(index, record)
        self._refresh(follow=selected)

    def append(self, record: HostRecord) -> None:
        self.insert(record, len(self.hosts))

    def remove(self, host: str) -> Optional[HostRecord]:
        """Remove the first host whose identity is *host*.

        When the removed host was under the cursor the cursor keeps its
        index, clamped to the shorter list; otherwise it follows its host.
        """
        idx = find_host(self.hosts, host)
        if idx is None:
            return None
        selected = self.current_selection()
        removed = self.hosts.pop(idx)
        self._refresh(follow=None if selected is removed else selected)
        return removed

    def replace_all(self, records: List[HostRecord]) -> None:
        self.hosts[:] = records
        self.cursor = 0
        self.scroll_offset = 0
        self._refresh()

    # ----------------------------------------------------------------- cursor
    def move_up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_down(self) -> None:
        if self.cursor < len(self.visible) - 1:
            self.cursor += 1

    def current_selection(self) -> Optional[HostRecord]:
        if 0 <= self.cursor < len(self.visible):
            return self.visible[self.cursor]
        return None

    def window(self, height: int) -> List[HostRecord]:
        """Return at most *height* visible hosts, scrolled so the cursor is included.

        The scroll offset only moves when the cursor leaves the current
        window, so moving back up does not drag the whole page along.
        """
        if height <= 0:
            return []
        offset = self.scroll_offset
        if self.cursor < offset:
            offset = self.cursor
        elif self.cursor >= offset + height:
            offset = self.cursor - height + 1
        offset = max(0, min(offset, len(self.visible) - height))
        self.scroll_offset = offset
        return self.visible[offset:offset + height]

    # ----------------------------------------------------------------- filter
    def set_filter(self, text: str) -> None:
        self.filter_text = text
        self.cursor = 0
        self.scroll_offset = 0
        self._refresh()

    def begin_filter(self) -> None:
        self.filtering = True
        self.set_filter("")

    def type_filter(self, char: str) -> None:
        self.set_filter(self.filter_text + char)

    def erase_filter(self) -> None:
        if self.filter_text:
            self.set_filter(self.filter_text[:-1])

    def commit_filter(self) -> None:
        self.filtering = False

    def cancel_filter(self) -> None:
        self.filtering = False
        self.set_filter("")

    # ----------------------------------------------------------------- status
    def post_status(self, message: str, *, error: bool = False) -> None:
        self._status = StatusMessage(message, self._clock() + self.status_timeout, error)

    def expire_status(self, now: Optional[float] = None) -> bool:
        """Drop the status message once its lifetime is over. Returns True if it was cleared."""
        if self._status is None:
            return False
        now = self._clock() if now is None else now
        if now >= self._status.expires_at:
            self._status = None
            return True
        return False

    @property
    def status(self) -> Optional[StatusMessage]:
        return self._status


__all__ = ["HostListItem", "HostNavigator", "ListItem", "StatusMessage"]
