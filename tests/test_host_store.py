"""Tests for host records and the TOML store."""

import tomllib

import pytest

from quickssh.hosts import HostRecord, find_host, generate_random_host
from quickssh.store import HostStore, StoreError


def test_save_then_load_preserves_content_and_order(tmp_path, sample_hosts):
    store = HostStore(str(tmp_path / "hosts.toml"))

    store.save(sample_hosts)

    assert store.load() == sample_hosts


def test_save_writes_expected_toml_keys(tmp_path):
    path = tmp_path / "hosts.toml"
    store = HostStore(str(path))
    store.save([HostRecord("box1", "1.2.3.4", "alice", True, ["dev", "prod"], "test box")])

    with open(path, "rb") as f:
        data = tomllib.load(f)

    assert data == {
        "hosts": [
            {
                "host": "box1",
                "hostname": "1.2.3.4",
                "user": "alice",
                "forward_agent": True,
                "tags": ["dev", "prod"],
                "description": "test box",
            }
        ]
    }


def test_save_overwrites_previous_content(tmp_path, sample_hosts):
    store = HostStore(str(tmp_path / "hosts.toml"))
    store.save(sample_hosts)

    store.save(sample_hosts[:1])

    assert store.load() == sample_hosts[:1]


def test_save_empty_list_round_trips(tmp_path):
    store = HostStore(str(tmp_path / "hosts.toml"))
    store.save([])
    assert store.load() == []


def test_save_creates_missing_parent_directory(tmp_path, sample_hosts):
    store = HostStore(str(tmp_path / "nested" / "dir" / "hosts.toml"))
    store.save(sample_hosts)
    assert (tmp_path / "nested" / "dir" / "hosts.toml").exists()


def test_load_missing_file_raises_store_error(tmp_path):
    store = HostStore(str(tmp_path / "absent.toml"))
    with pytest.raises(StoreError) as excinfo:
        store.load()
    assert excinfo.value.path == str(tmp_path / "absent.toml")


def test_load_malformed_file_raises_store_error(tmp_path):
    path = tmp_path / "hosts.toml"
    path.write_text("[[hosts]\nhost = ", encoding="utf-8")
    with pytest.raises(StoreError):
        HostStore(str(path)).load()


def test_load_rejects_non_table_hosts(tmp_path):
    path = tmp_path / "hosts.toml"
    path.write_text('hosts = "web"\n', encoding="utf-8")
    with pytest.raises(StoreError):
        HostStore(str(path)).load()


def test_load_fills_missing_keys_with_defaults(tmp_path):
    path = tmp_path / "hosts.toml"
    path.write_text('[[hosts]]\nhost = "bare"\n', encoding="utf-8")

    (record,) = HostStore(str(path)).load()

    assert record == HostRecord(host="bare", hostname="", user="", forward_agent=False, tags=[], description="")


def test_save_failure_raises_store_error(tmp_path, sample_hosts):
    # A directory where the file should be makes open() fail
    path = tmp_path / "hosts.toml"
    path.mkdir()
    with pytest.raises(StoreError):
        HostStore(str(path)).save(sample_hosts)


def test_default_store_path_comes_from_environment(tmp_path):
    assert HostStore().path == str(tmp_path / "hosts.toml")


def test_find_host_returns_first_match(sample_hosts):
    duplicate = HostRecord("web", "10.9.9.9")
    records = sample_hosts + [duplicate]
    assert find_host(records, "web") == 0
    assert find_host(records, "missing") is None


def test_generate_random_host_is_deterministic_with_seeded_rng():
    import random

    first = generate_random_host(random.Random(7))
    second = generate_random_host(random.Random(7))

    assert first == second
    assert first.host.startswith("demo-")
    assert first.forward_agent is True
    assert first.tags == []
