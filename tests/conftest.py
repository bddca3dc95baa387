"""Shared test fixtures for fanlog test suite."""

import json
import os
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from fanlog.lib.log_lib import Level, MemoryDestination, Message, Router
from fanlog.lib.log_lib import router as _router_mod


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-threaded stress tests")


# ---------------------------------------------------------------------------
# Singleton isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_router():
    """Reset the Router singleton between tests."""
    old = _router_mod._router
    _router_mod._router = None
    yield
    _router_mod._router = old


# ---------------------------------------------------------------------------
# Messages and sinks
# ---------------------------------------------------------------------------
FIXED_TZ = timezone(timedelta(hours=2))
FIXED_TIME = datetime(2024, 3, 9, 14, 5, 7, tzinfo=FIXED_TZ)


@pytest.fixture
def fixed_time():
    """A fixed, timezone-aware timestamp (2024-03-09 14:05:07 +02:00)."""
    return FIXED_TIME


@pytest.fixture
def make_message():
    """Factory for messages with a fixed timestamp and origin."""
    def _make(text="Hello, World!", level=Level.INFO, tags=(),
              file="/src/app/main.py", line=42):
        return Message(text=text, level=level, tags=tuple(tags),
                       timestamp=FIXED_TIME, file=file, line=line)
    return _make


@pytest.fixture
def sink():
    """An in-memory destination."""
    return MemoryDestination()


@pytest.fixture
def router():
    """A debug-mode Router with nothing attached."""
    return Router(debug=True)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path, monkeypatch):
    """Provide a temporary home directory for ~/.fanlog/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.delenv("FANLOG_ENV", raising=False)
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def tmp_project(tmp_path, tmp_config_home, monkeypatch):
    """A working directory with no .fanlog.json, set as cwd."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def sample_project_config(tmp_project):
    """Write a .fanlog.json file in the tmp project."""
    config = {
        "environment": "release",
        "routes": ["stderr:warning,error"],
        "log_dir": "project-logs",
    }
    path = tmp_project / ".fanlog.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path, config


@pytest.fixture
def sample_global_config(tmp_config_home):
    """Write a global config file in the tmp home."""
    config_dir = tmp_config_home / ".fanlog"
    config_dir.mkdir()
    config = {
        "environment": "debug",
        "routes": ["console"],
        "log_dir": "/var/log/global",
    }
    path = config_dir / "config.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path, config
