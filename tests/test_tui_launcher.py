import io
from types import SimpleNamespace

from quickssh.hosts import HostRecord
from quickssh.tui import launcher
from quickssh.tui.launcher import build_connect_argument, build_ssh_command, launch_session


def test_connect_argument_is_user_at_hostname():
    record = HostRecord("box1", hostname="1.2.3.4", user="alice")
    assert build_connect_argument(record) == "alice@1.2.3.4"


def test_empty_parts_are_passed_through():
    assert build_connect_argument(HostRecord("x")) == "@"
    assert build_connect_argument(HostRecord("x", hostname="h")) == "@h"


def test_build_ssh_command_uses_configured_binary():
    record = HostRecord("box1", hostname="1.2.3.4", user="alice")
    assert build_ssh_command(record) == ["ssh", "alice@1.2.3.4"]
    assert build_ssh_command(record, "/usr/local/bin/ssh") == ["/usr/local/bin/ssh", "alice@1.2.3.4"]


def test_launch_session_inherits_streams(monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        return SimpleNamespace(returncode=0)

    monkeypatch.setattr(launcher.subprocess, "run", fake_run)
    err = io.StringIO()

    rc = launch_session(HostRecord("box1", hostname="1.2.3.4", user="alice"), stderr=err)

    assert rc == 0
    assert calls == [(["ssh", "alice@1.2.3.4"], {})]
    assert err.getvalue() == ""


def test_launch_session_reports_non_zero_exit(monkeypatch):
    monkeypatch.setattr(launcher.subprocess, "run", lambda cmd: SimpleNamespace(returncode=255))
    err = io.StringIO()

    rc = launch_session(HostRecord("box1", hostname="h", user="u"), stderr=err)

    assert rc == 255
    assert "exited with code 255" in err.getvalue()


def test_launch_session_reports_missing_binary(monkeypatch):
    def fake_run(cmd):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(launcher.subprocess, "run", fake_run)
    err = io.StringIO()

    rc = launch_session(HostRecord("box1", hostname="h", user="u"), "no-such-ssh", stderr=err)

    assert rc == -1
    assert "no-such-ssh executable was not found" in err.getvalue()


def test_launch_session_reports_os_error(monkeypatch):
    def fake_run(cmd):
        raise PermissionError("denied")

    monkeypatch.setattr(launcher.subprocess, "run", fake_run)
    err = io.StringIO()

    assert launch_session(HostRecord("box1"), stderr=err) == -1
    assert "Connection failed" in err.getvalue()
