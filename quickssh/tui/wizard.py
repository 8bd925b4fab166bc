from __future__ import annotations

import enum
from typing import List, Optional

from quickssh.hosts import HostRecord

FIELDS = ("Host", "HostName", "User", "ForwardAgent", "Tags", "Description")
TAG_SEPARATOR = ","


class WizardState(enum.Enum):
    IDLE = "idle"
    EDITING = "editing"
    COMPLETE = "complete"


class AddHostWizard:
    """
    Field-by-field collector for one new :class:`HostRecord`.

    Each field is typed into its own buffer and confirmed with
    :meth:`commit_field`. There is no way back once editing has started: the
    wizard either runs through every field or the application is closed.
    Input is not validated; ``ForwardAgent`` is only true for the exact
    text ``true``.
    """

    def __init__(self):
        self.state = WizardState.IDLE
        self.field_index = 0
        self.buffers: List[str] = [""] * len(FIELDS)

    @property
    def active(self) -> bool:
        return self.state is WizardState.EDITING

    @property
    def current_field(self) -> str:
        return FIELDS[self.field_index]

    @property
    def current_text(self) -> str:
        return self.buffers[self.field_index]

    def begin(self) -> None:
        self.buffers = [""] * len(FIELDS)
        self.field_index = 0
        self.state = WizardState.EDITING

    def type_char(self, char: str) -> None:
        if self.active:
            self.buffers[self.field_index] += char

    def backspace(self) -> None:
        if self.active and self.buffers[self.field_index]:
            self.buffers[self.field_index] = self.buffers[self.field_index][:-1]

    def commit_field(self) -> Optional[HostRecord]:
        """Confirm the current field. Returns the finished record after the last field."""
        if not self.active:
            return None
        if self.field_index + 1 < len(FIELDS):
            self.field_index += 1
            return None

        self.state = WizardState.COMPLETE
        record = self._build_record()
        self.state = WizardState.IDLE
        self.field_index = 0
        return record

    def _build_record(self) -> HostRecord:
        host, hostname, user, forward_agent, tags, description = self.buffers
        return HostRecord(
            host=host,
            hostname=hostname,
            user=user,
            forward_agent=forward_agent == "true",
            tags=split_tags(tags),
            description=description,
        )


def split_tags(text: str) -> List[str]:
    if not text:
        return []
    return text.split(TAG_SEPARATOR)


__all__ = ["AddHostWizard", "FIELDS", "WizardState", "split_tags"]
