"""Headless tests for the Textual front-end."""

import asyncio

from quickssh.config import Config
from quickssh.hosts import HostRecord
from quickssh.tui import app as app_module
from quickssh.tui.app import HostList, QuickSshApp, StatusBar
from quickssh.tui.controller import HostController, Mode


class DummyStore:
    def __init__(self, records):
        self.records = list(records)
        self.saved = []
        self.path = "/tmp/dummy.toml"

    def load(self):
        return list(self.records)

    def save(self, records):
        self.saved.append(list(records))


def _make_app(tmp_path, records):
    controller = HostController(DummyStore(records), Config(str(tmp_path / "config.json")))
    controller.load()
    return QuickSshApp(controller)


def run_app(app, *keys, inspect=None):
    """Press *keys* headless; *inspect* runs against the live app before shutdown."""

    async def _drive():
        async with app.run_test(size=(100, 30)) as pilot:
            await pilot.pause()
            for key in keys:
                await pilot.press(key)
            if inspect is not None:
                inspect(app)

    asyncio.run(_drive())


def test_enter_exits_with_selected_host(tmp_path, sample_hosts):
    app = _make_app(tmp_path, sample_hosts)

    run_app(app, "j", "enter")

    assert app.return_value is not None
    assert app.return_value.host == "db"


def test_q_exits_without_host(tmp_path, sample_hosts):
    app = _make_app(tmp_path, sample_hosts)

    run_app(app, "q")

    assert app.return_value is None


def test_keys_reach_controller(tmp_path, sample_hosts):
    app = _make_app(tmp_path, sample_hosts)

    widgets = []
    run_app(app, "d", "a", "x", inspect=lambda live: widgets.append(live.query_one(HostList)))

    controller = app.controller
    assert [h.host for h in controller.hosts] == ["db", "lab"]
    assert controller.mode is Mode.WIZARD
    assert controller.wizard.current_text == "x"
    assert controller.viewport[0] > 0
    assert len(widgets) == 1


def test_error_status_drops_success_colour(tmp_path, sample_hosts):
    app = _make_app(tmp_path, sample_hosts)
    seen = []

    def check(live):
        bar = live.query_one(StatusBar)
        bar.set_message("Saved", color="#04B575")
        seen.append(bar.styles.inline.has_rule("color"))
        bar.set_message("Save failed", error=True, color="#04B575")
        seen.append(bar.styles.inline.has_rule("color"))
        seen.append(bar.has_class("error"))

    run_app(app, inspect=check)

    assert seen == [True, False, True]


def test_main_launches_ssh_after_ui_exits(monkeypatch, tmp_path):
    monkeypatch.setattr(app_module, "setup_logging", lambda *a: None)
    launched = []
    record = HostRecord("box1", hostname="1.2.3.4", user="alice")

    monkeypatch.setattr(app_module.QuickSshApp, "run", lambda self: record)
    monkeypatch.setattr(app_module, "launch_session", lambda rec, cmd: launched.append((rec, cmd)) or 0)

    assert app_module.main([]) == 0
    assert launched == [(record, "ssh")]


def test_main_returns_one_when_ui_fails(monkeypatch, tmp_path):
    monkeypatch.setattr(app_module, "setup_logging", lambda *a: None)
    def broken_run(self):
        raise RuntimeError("no terminal")

    monkeypatch.setattr(app_module.QuickSshApp, "run", broken_run)
    monkeypatch.setattr(app_module, "launch_session", lambda *a: _unexpected_launch())

    assert app_module.main([]) == 1


def test_main_quit_does_not_launch(monkeypatch, tmp_path):
    monkeypatch.setattr(app_module, "setup_logging", lambda *a: None)
    monkeypatch.setattr(app_module.QuickSshApp, "run", lambda self: None)
    monkeypatch.setattr(app_module, "launch_session", lambda *a: _unexpected_launch())

    assert app_module.main(["--log-level", "DEBUG"]) == 0


def _unexpected_launch():
    raise AssertionError("launch_session should not be called")


def test_package_main_delegates_to_app_main(monkeypatch):
    import quickssh.tui as tui_package

    calls = []
    monkeypatch.setattr(app_module, "main", lambda *args, **kwargs: calls.append(args) or 7)

    assert tui_package.main(["--demo"]) == 7
    assert calls == [(["--demo"],)]


def test_setup_logging_writes_rotating_file(tmp_path):
    import logging
    from logging.handlers import RotatingFileHandler

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        app_module.setup_logging("info", str(tmp_path / "logs"))
        handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert root.level == logging.INFO
        logging.getLogger("quickssh.test").info("hello")
        handlers[0].flush()
        assert "hello" in (tmp_path / "logs" / "quickssh.log").read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
