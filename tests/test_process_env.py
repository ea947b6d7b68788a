"""Tests for the process environment bridge."""

import os

import pytest

from envie import load
from envie.exceptions import EnvironmentWriteError
from envie.services.process_env import set_system_environment, snapshot_environment


@pytest.fixture
def scratch_var(monkeypatch):
    """A variable name that monkeypatch restores after the test."""
    name = "ENVIE_TEST_SYSTEM_VAR"
    monkeypatch.setenv(name, "placeholder")
    return name


def test_sets_live_environment(scratch_var):
    set_system_environment(scratch_var, "live")
    assert os.environ[scratch_var] == "live"


def test_snapshot_is_a_copy(scratch_var):
    snap = snapshot_environment()
    set_system_environment(scratch_var, "changed")
    assert snap[scratch_var] == "placeholder"


@pytest.mark.parametrize("key", ["", "BAD=KEY", "NUL\x00KEY"])
def test_rejects_names_the_os_refuses(key):
    with pytest.raises(EnvironmentWriteError):
        set_system_environment(key, "v")


@pytest.mark.parametrize("key", [" ENVIE_TEST_SPACED", "#ENVIE_TEST_HASH"])
def test_accepts_names_a_dotenv_file_cannot_hold(monkeypatch, key):
    monkeypatch.setenv(key, "placeholder")
    set_system_environment(key, "live")
    assert os.environ[key] == "live"


def test_os_rejection_wrapped(scratch_var):
    with pytest.raises(EnvironmentWriteError):
        set_system_environment(scratch_var, "nul\x00byte")


def test_store_bridge_leaves_store_and_file_alone(write_dotenv, scratch_var):
    path = write_dotenv("A=1\n")
    store = load()
    store.set_system_environment(scratch_var, "bridged")
    assert os.environ[scratch_var] == "bridged"
    assert store.get(scratch_var) == "placeholder"
    assert path.read_text() == "A=1\n"


def test_visible_after_reload(write_dotenv, scratch_var):
    write_dotenv("A=1\n")
    store = load()
    store.set_system_environment(scratch_var, "bridged")
    store.reload()
    assert store.get(scratch_var) == "bridged"
