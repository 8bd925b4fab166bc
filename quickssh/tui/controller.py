"""
Event dispatch for the host TUI.

:class:`HostController` owns the host list and routes each input event to
exactly one handler, picked from a table keyed by the current mode and the
event kind. It is independent of Textual so it can be driven directly.
"""

from __future__ import annotations

import enum
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

from quickssh.config import Config, Theme
from quickssh.hosts import HostRecord, generate_random_host
from quickssh.ssh_config_import import SshConfigImportError, new_hosts_from_ssh_config
from quickssh.store import HostStore, StoreError
from quickssh.tui.navigator import Clock, HostNavigator
from quickssh.tui.wizard import AddHostWizard

LOG = logging.getLogger(__name__)

QUIT_KEYS = ("ctrl+c",)


class Mode(enum.Enum):
    BROWSE = "browse"
    FILTER = "filter"
    WIZARD = "wizard"


class EventKind(enum.Enum):
    KEY = "key"
    RESIZE = "resize"
    TICK = "tick"


@dataclass(frozen=True)
class KeyPress:
    key: str
    character: Optional[str] = None
    kind: ClassVar[EventKind] = EventKind.KEY

    @property
    def printable(self) -> bool:
        return self.character is not None and len(self.character) == 1 and self.character.isprintable()

    def matches(self, names: Sequence[str]) -> bool:
        return self.key in names or (self.character is not None and self.character in names)


@dataclass(frozen=True)
class Resize:
    width: int
    height: int
    kind: ClassVar[EventKind] = EventKind.RESIZE


@dataclass(frozen=True)
class Tick:
    now: Optional[float] = None
    kind: ClassVar[EventKind] = EventKind.TICK


Event = Union[KeyPress, Resize, Tick]


class Action(enum.Enum):
    NONE = "none"
    QUIT = "quit"
    CONNECT = "connect"
    HELP = "help"


@dataclass(frozen=True)
class Outcome:
    action: Action = Action.NONE
    record: Optional[HostRecord] = None


NOTHING = Outcome()


class HostController:
    """Top-level state machine for the quickssh TUI."""

    def __init__(
        self,
        store: HostStore,
        config: Config,
        *,
        theme: Optional[Theme] = None,
        hosts: Optional[List[HostRecord]] = None,
        clock: Clock = time.monotonic,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.config = config
        self.theme = theme or Theme()
        self.hosts: List[HostRecord] = hosts if hosts is not None else []
        self.navigator = HostNavigator(self.hosts, status_timeout=config.status_timeout, clock=clock)
        self.wizard = AddHostWizard()
        self.viewport: Tuple[int, int] = (0, 0)
        self._rng = rng

        self._handlers: Dict[Tuple[Mode, EventKind], Callable[[Event], Outcome]] = {
            (Mode.BROWSE, EventKind.KEY): self._browse_key,
            (Mode.FILTER, EventKind.KEY): self._filter_key,
            (Mode.WIZARD, EventKind.KEY): self._wizard_key,
        }
        for mode in Mode:
            self._handlers[(mode, EventKind.RESIZE)] = self._resize
            self._handlers[(mode, EventKind.TICK)] = self._tick

        commands: List[Tuple[Tuple[str, ...], Callable[[], Outcome]]] = [
            (("up", "k"), self.move_up),
            (("down", "j"), self.move_down),
            (("a",), self.begin_add),
            (("d",), self.delete_selected),
            (("s",), self.save),
            (("enter", "space"), self.connect),
            (("q", "ctrl+c"), self.quit),
            (("slash", "/"), self.begin_filter),
            (("escape",), self.clear_filter),
            (("i",), self.import_ssh_config),
            (("question_mark", "?"), self.show_help),
        ]
        if config.demo_hosts:
            commands.append((("g",), self.insert_demo_host))
        self._commands = commands

    # ------------------------------------------------------------------ state
    @property
    def mode(self) -> Mode:
        if self.wizard.active:
            return Mode.WIZARD
        if self.navigator.filtering:
            return Mode.FILTER
        return Mode.BROWSE

    def load(self) -> None:
        """Fill the host list from the store; on failure start empty and say why."""
        try:
            records = self.store.load()
        except StoreError as exc:
            LOG.warning("Starting with an empty host list: %s", exc)
            self.navigator.replace_all([])
            self.navigator.post_status(f"Error loading hosts: {exc}", error=True)
            return
        self.navigator.replace_all(records)
        LOG.info("Loaded %d host(s)", len(records))

    def dispatch(self, event: Event) -> Outcome:
        handler = self._handlers.get((self.mode, event.kind))
        if handler is None:
            return NOTHING
        return handler(event)

    # --------------------------------------------------------------- handlers
    def _browse_key(self, event: KeyPress) -> Outcome:
        for names, command in self._commands:
            if event.matches(names):
                return command()
        return NOTHING

    def _filter_key(self, event: KeyPress) -> Outcome:
        nav = self.navigator
        if event.key in QUIT_KEYS:
            return Outcome(Action.QUIT)
        if event.key == "enter":
            nav.commit_filter()
        elif event.key == "escape":
            nav.cancel_filter()
        elif event.key == "backspace":
            nav.erase_filter()
        elif event.printable:
            nav.type_filter(event.character)
        return NOTHING

    def _wizard_key(self, event: KeyPress) -> Outcome:
        if event.key in QUIT_KEYS:
            return Outcome(Action.QUIT)
        if event.key == "enter":
            record = self.wizard.commit_field()
            if record is not None:
                self._finish_add(record)
        elif event.key == "backspace":
            self.wizard.backspace()
        elif event.printable:
            self.wizard.type_char(event.character)
        return NOTHING

    def _resize(self, event: Resize) -> Outcome:
        frame_w, frame_h = self.theme.frame_size()
        self.viewport = (max(0, event.width - frame_w), max(0, event.height - frame_h))
        return NOTHING

    def _tick(self, event: Tick) -> Outcome:
        self.navigator.expire_status(event.now)
        return NOTHING

    # --------------------------------------------------------------- commands
    def move_up(self) -> Outcome:
        self.navigator.move_up()
        return NOTHING

    def move_down(self) -> Outcome:
        self.navigator.move_down()
        return NOTHING

    def begin_add(self) -> Outcome:
        self.wizard.begin()
        return NOTHING

    def delete_selected(self) -> Outcome:
        selected = self.navigator.current_selection()
        if selected is None:
            self.navigator.post_status("No host selected", error=True)
            return NOTHING
        self.navigator.remove(selected.host)
        LOG.info("Deleted host %s", selected.host)
        self.navigator.post_status(f"Deleted {selected.host}")
        if self.config.auto_save:
            self._persist()
        return NOTHING

    def save(self) -> Outcome:
        if self._persist():
            self.navigator.post_status(f"Saved {len(self.hosts)} host(s)")
        return NOTHING

    def connect(self) -> Outcome:
        selected = self.navigator.current_selection()
        if selected is None:
            self.navigator.post_status("No host selected", error=True)
            return NOTHING
        return Outcome(Action.CONNECT, selected)

    def quit(self) -> Outcome:
        return Outcome(Action.QUIT)

    def begin_filter(self) -> Outcome:
        self.navigator.begin_filter()
        return NOTHING

    def clear_filter(self) -> Outcome:
        if self.navigator.filter_text:
            self.navigator.cancel_filter()
        return NOTHING

    def show_help(self) -> Outcome:
        return Outcome(Action.HELP)

    def import_ssh_config(self) -> Outcome:
        path = self.config.ssh_config_path
        try:
            fresh = new_hosts_from_ssh_config(path, self.hosts)
        except SshConfigImportError as exc:
            LOG.warning("SSH config import failed: %s", exc)
            self.navigator.post_status(str(exc), error=True)
            return NOTHING
        for record in fresh:
            self.navigator.append(record)
        self.navigator.post_status(f"Imported {len(fresh)} host(s) from {path}")
        if fresh and self.config.auto_save:
            self._persist()
        return NOTHING

    def insert_demo_host(self) -> Outcome:
        record = generate_random_host(self._rng)
        self.navigator.insert(record, 0)
        self.navigator.post_status(f"Added {record.hostname}")
        if self.config.auto_save:
            self._persist()
        return NOTHING

    # ---------------------------------------------------------------- helpers
    def _finish_add(self, record: HostRecord) -> None:
        self.navigator.append(record)
        LOG.info("Added host %s", record.host)
        self.navigator.post_status(f"Added {record.host}")
        self._persist()

    def _persist(self) -> bool:
        try:
            self.store.save(list(self.hosts))
        except StoreError as exc:
            LOG.error("Save failed: %s", exc)
            self.navigator.post_status(f"Save failed: {exc}", error=True)
            return False
        return True


__all__ = [
    "Action",
    "EventKind",
    "HostController",
    "KeyPress",
    "Mode",
    "Outcome",
    "Resize",
    "Tick",
]
