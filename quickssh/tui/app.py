from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from quickssh.config import Config, Theme
from quickssh.hosts import HostRecord
from quickssh.platform_utils import ensure_parent_dir
from quickssh.store import HostStore
from quickssh.tui.controller import Action, HostController, KeyPress, Mode, Resize, Tick
from quickssh.tui.launcher import launch_session
from quickssh.tui.navigator import HostListItem, ListItem

LOG = logging.getLogger(__name__)

# Rows used by everything except the host list: header, title, prompt, status, hint and spacing.
CHROME_ROWS = 7
ITEM_ROWS = 2
TICK_INTERVAL = 0.5


class HelpScreen(ModalScreen[None]):
    """Modal overlay listing keyboard shortcuts."""

    def __init__(self, demo_hosts: bool = False):
        super().__init__()
        self.demo_hosts = demo_hosts

    def compose(self) -> ComposeResult:
        lines = [
            "[b]quickssh[/b]",
            "",
            "Navigation:",
            "  ↑/↓ or k/j   Move selection",
            "  /            Filter hosts",
            "  Esc          Clear the filter",
            "",
            "Actions:",
            "  Enter/Space  Connect to highlighted host",
            "  a            Add a host",
            "  d            Delete highlighted host",
            "  s            Save hosts",
            "  i            Import hosts from ~/.ssh/config",
        ]
        if self.demo_hosts:
            lines.append("  g            Insert a random demo host")
        lines += [
            "  q or Ctrl+C  Quit",
            "",
            "While adding a host every field must be confirmed with Enter;",
            "Ctrl+C quits without saving the new host.",
            "",
            "Press Esc, q, or ? to close this help.",
        ]
        yield Static("\n".join(lines), id="help-panel")

    def on_key(self, event: events.Key) -> None:
        event.stop()
        if event.key in {"escape", "q", "question_mark"} or event.character == "?":
            self.dismiss()


class HostList(Static):
    """Two-line entries (title and description) with the cursor row highlighted."""

    def show_hosts(self, controller: HostController, rows: int) -> None:
        nav = controller.navigator
        theme = controller.theme
        if not nav.visible:
            if nav.filter_text:
                self.update("No matches for current filter")
            else:
                self.update("No hosts yet. Press a to add one or i to import ~/.ssh/config.")
            return

        selected = nav.current_selection()
        text = Text()
        for record in nav.window(max(1, rows)):
            item: ListItem = HostListItem(record)
            is_selected = record is selected
            marker = "│ " if is_selected else "  "
            title_style = f"bold {theme.title_background}" if is_selected else "bold"
            text.append(f"{marker}{item.title}\n", style=title_style)
            text.append(f"{marker}{item.description}\n", style="dim")
        count = f"{len(nav.visible)} of {len(nav.hosts)}" if nav.filter_text else str(len(nav.hosts))
        text.append(f"\n{count} host(s)", style="dim")
        self.update(text)


class DetailsPanel(Static):
    """Shows information about the selected host."""

    def show_empty(self, message: str = "No item selected") -> None:
        self.update(message)

    def show_host(self, record: Optional[HostRecord]) -> None:
        if record is None:
            self.show_empty()
            return
        rows = [
            ("Host", record.host),
            ("HostName", record.hostname or "-"),
            ("User", record.user or "-"),
            ("ForwardAgent", "yes" if record.forward_agent else "no"),
            ("Tags", ", ".join(record.tags) or "-"),
            ("Description", record.description or "-"),
        ]
        text = Text()
        for label, value in rows:
            text.append(f"{label:<14}", style="bold")
            text.append(f"{value}\n")
        self.update(text)


class StatusBar(Static):
    """Single-line status indicator."""

    def set_message(self, message: str, *, error: bool = False, color: Optional[str] = None) -> None:
        self.set_class(error, "error")
        # An inline colour would mask the ``.error`` rule.
        self.styles.color = color if color and not error else None
        self.update(Text(message or ""))


class QuickSshApp(App[Optional[HostRecord]]):
    """Textual front-end that renders :class:`HostController` state.

    Returns the host to connect to from :meth:`run`, or ``None`` on quit.
    """

    TITLE = "quickssh"
    CSS = """
    Screen {
        layout: vertical;
    }

    HelpScreen {
        align: center middle;
    }

    #title {
        height: 1;
        padding: 0 1;
        text-style: bold;
    }

    #body {
        height: 1fr;
    }

    #host-list {
        width: 1fr;
        height: 1fr;
    }

    #details {
        width: 1fr;
        height: 1fr;
        margin-left: 2;
        border: round $secondary;
        padding: 1;
    }

    #prompt {
        height: 1;
    }

    #status {
        height: 1;
        padding: 0 1;
    }

    #status.error {
        background: $error;
        color: $text;
    }

    #hint {
        height: 1;
        text-style: dim;
    }

    #help-panel {
        width: 70%;
        background: $surface;
        border: round $secondary;
        padding: 2;
        content-align: left top;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit_app", "Quit", show=False, priority=True),
    ]

    HINT = "↑/k up • ↓/j down • / filter • a add • d delete • s save • enter connect • ? help • q quit"

    def __init__(self, controller: HostController, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self.theme_settings: Theme = controller.theme

    # --------------------------------------------------------------------- UI
    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            yield Static("Available Hosts", id="title")
            with Horizontal(id="body"):
                yield HostList(id="host-list")
                yield DetailsPanel(id="details")
            yield Static("", id="prompt")
            yield StatusBar(id="status")
            yield Static(self.HINT, id="hint")

    def on_mount(self) -> None:
        theme = self.theme_settings
        title = self.query_one("#title", Static)
        title.styles.color = theme.title_foreground
        title.styles.background = theme.title_background
        self.query_one("#main", Vertical).styles.padding = theme.padding
        self.host_list = self.query_one(HostList)
        self.details_panel = self.query_one(DetailsPanel)
        self.prompt_line = self.query_one("#prompt", Static)
        self.status_bar = self.query_one(StatusBar)

        self.controller.dispatch(Resize(self.size.width, self.size.height))
        self.set_interval(TICK_INTERVAL, self._expire_status, name="status-expiry")
        self.refresh_view()

    # ---------------------------------------------------------------- bindings
    def action_quit_app(self) -> None:
        self.exit(None)

    # ----------------------------------------------------------------- events
    def on_key(self, event: events.Key) -> None:
        event.stop()
        outcome = self.controller.dispatch(KeyPress(event.key, event.character))
        if outcome.action is Action.QUIT:
            self.exit(None)
            return
        if outcome.action is Action.CONNECT:
            LOG.info("Handing off to ssh for %s", outcome.record.host)
            self.exit(outcome.record)
            return
        if outcome.action is Action.HELP:
            self.push_screen(HelpScreen(demo_hosts=self.controller.config.demo_hosts))
        self.refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self.controller.dispatch(Resize(event.size.width, event.size.height))
        if hasattr(self, "host_list"):
            self.refresh_view()

    def _expire_status(self) -> None:
        had_status = self.controller.navigator.status is not None
        self.controller.dispatch(Tick())
        if had_status and self.controller.navigator.status is None:
            self.refresh_view()

    # --------------------------------------------------------------- render
    def refresh_view(self) -> None:
        controller = self.controller
        nav = controller.navigator
        rows = max(1, (controller.viewport[1] - CHROME_ROWS) // ITEM_ROWS)
        self.host_list.show_hosts(controller, rows)
        self.details_panel.show_host(nav.current_selection())
        self.prompt_line.update(self._prompt_text())

        status = nav.status
        if status is None:
            self.status_bar.set_message("")
        else:
            self.status_bar.set_message(status.text, error=status.error, color=self.theme_settings.status_foreground)

    def _prompt_text(self) -> Text:
        controller = self.controller
        mode = controller.mode
        if mode is Mode.WIZARD:
            wizard = controller.wizard
            text = Text(f"Adding new SSH host ({wizard.current_field}): ", style="bold")
            text.append(wizard.current_text + "▏")
            text.append("   enter confirm • backspace delete • ctrl+c quit", style="dim")
            return text
        if mode is Mode.FILTER:
            text = Text("Filter: ", style="bold")
            text.append(controller.navigator.filter_text + "▏")
            text.append("   enter apply • esc cancel", style="dim")
            return text
        if controller.navigator.filter_text:
            text = Text("Filter: ", style="bold")
            text.append(controller.navigator.filter_text)
            text.append("   esc clear", style="dim")
            return text
        return Text("")


# ---------------------------------------------------------------------- entry
def setup_logging(level: str, log_dir: str) -> None:
    """Send log records to a rotating file; the terminal belongs to the UI."""
    log_level = getattr(logging, str(level).upper(), logging.WARNING)
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)
    try:
        ensure_parent_dir(os.path.join(log_dir, "quickssh.log"))
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "quickssh.log"),
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
    except OSError as exc:
        print(f"Logging disabled: {exc}", file=sys.stderr)
        root_logger.addHandler(logging.NullHandler())
        return
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)


def parse_args(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(prog="quickssh", description="Browse SSH host shortcuts and connect")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level (default: WARNING)",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Enable the 'g' key that inserts randomly generated hosts",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    store = HostStore()
    setup_logging(args.log_level, os.path.dirname(store.path))

    config = Config()
    if args.demo:
        config.set_setting("ui.demo_hosts", True)

    controller = HostController(store, config, theme=Theme())
    controller.load()
    app = QuickSshApp(controller)
    try:
        record = app.run()
    except KeyboardInterrupt:
        return 0
    except Exception as exc:
        LOG.exception("Terminal UI failed")
        print(f"Error running program: {exc}", file=sys.stderr)
        return 1

    if getattr(app, "return_code", 0):
        LOG.error("Terminal UI exited with code %s", app.return_code)
        return 1

    if record is not None:
        launch_session(record, config.ssh_command)
    return 0


__all__ = ["main", "QuickSshApp", "setup_logging"]
