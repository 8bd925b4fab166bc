import os
import sys

import pytest

# Ensure project root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from quickssh.hosts import HostRecord  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_store_env(monkeypatch, tmp_path):
    """Keep tests away from the developer's real host file and settings."""
    monkeypatch.setenv("QUICKSSH_STORE", str(tmp_path / "hosts.toml"))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("LOCALAPPDATA", raising=False)


@pytest.fixture
def sample_hosts():
    return [
        HostRecord("web", "10.0.0.1", "deploy", False, ["prod", "frontend"], "Web server"),
        HostRecord("db", "10.0.0.2", "postgres", False, ["prod"], "Primary database"),
        HostRecord("lab", "192.168.1.5", "alice", True, [], "Home lab"),
    ]
