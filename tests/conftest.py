"""
Test fixtures for ups tests.
"""

import stat

import pytest
from click.testing import CliRunner

from ups.runner import ScriptRunner
from ups.store import DataStore


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the real user config and data directories."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    for var in ("UPS_CONFIG", "UPS_DATA_PATH", "UPS_MAX_WORKERS", "UPS_TIMEOUT", "UPS_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_path(tmp_path):
    """Path to a data file that does not exist yet."""
    return tmp_path / "ups" / "data"


@pytest.fixture
def store(data_path):
    return DataStore(data_path)


@pytest.fixture
def quiet_runner():
    """ScriptRunner that does not print progress notices."""
    return ScriptRunner(quiet=True)


@pytest.fixture
def make_script(tmp_path):
    """Factory for executable checker scripts.

    make_script("app", stdout="1.2.3") writes a shell script that prints
    stdout, writes stderr and exits with exit_code.
    """
    scripts_dir = tmp_path / "scripts"
    scripts_dir.mkdir()

    def _make(name, stdout="", exit_code=0, stderr="", body=None):
        path = scripts_dir / f"{name}.sh"
        if body is None:
            lines = ["#!/bin/sh"]
            if stdout:
                lines.append(f"printf '%s\\n' '{stdout}'")
            if stderr:
                lines.append(f"printf '%s\\n' '{stderr}' >&2")
            lines.append(f"exit {exit_code}")
            body = "\n".join(lines) + "\n"
        path.write_text(body)
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
