"""Tests for fanlog.config — three-layer configuration resolution."""

import argparse
import json

import pytest

from fanlog.config import (
    find_project_config, is_debug_environment, load_json,
    load_project_config, resolve_config, save_project_config,
)


def _args(**kwargs):
    ns = argparse.Namespace(environment=None, routes=[], log_dir=None,
                            config=None)
    for k, v in kwargs.items():
        setattr(ns, k, v)
    return ns


class TestLoading:
    """JSON loading and project config discovery."""

    def test_load_json_missing(self, tmp_path):
        assert load_json(tmp_path / "nope.json") == {}

    def test_load_json_invalid(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        assert load_json(bad) == {}

    def test_load_json_non_object(self, tmp_path):
        arr = tmp_path / "arr.json"
        arr.write_text("[1, 2]", encoding="utf-8")
        assert load_json(arr) == {}

    def test_find_project_config_walks_up(self, sample_project_config):
        path, _ = sample_project_config
        nested = path.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_project_config(nested) == path.resolve()

    def test_no_project_config(self, tmp_project):
        cfg, path = load_project_config(tmp_project)
        assert cfg == {} and path is None


class TestResolution:
    """CLI > project > global > FANLOG_ENV > default."""

    def test_defaults(self, tmp_project):
        cfg = resolve_config(_args())
        assert cfg == {"environment": "debug", "routes": None, "log_dir": None}

    def test_global_layer(self, tmp_project, sample_global_config):
        _, data = sample_global_config
        cfg = resolve_config(_args())
        assert cfg["routes"] == data["routes"]
        assert cfg["log_dir"] == data["log_dir"]

    def test_project_beats_global(self, sample_project_config,
                                  sample_global_config):
        _, data = sample_project_config
        cfg = resolve_config(_args())
        assert cfg["environment"] == "release"
        assert cfg["routes"] == data["routes"]
        assert cfg["log_dir"] == "project-logs"

    def test_cli_beats_project(self, sample_project_config):
        cfg = resolve_config(_args(environment="debug", routes=["console"],
                                   log_dir="cli-logs"))
        assert cfg == {"environment": "debug", "routes": ["console"],
                       "log_dir": "cli-logs"}

    def test_empty_cli_list_is_unset(self, sample_project_config):
        assert resolve_config(_args(routes=[]))["routes"] == \
            ["stderr:warning,error"]

    def test_env_var_fallback(self, tmp_project, monkeypatch):
        monkeypatch.setenv("FANLOG_ENV", "release")
        assert resolve_config(_args())["environment"] == "release"

    def test_explicit_config_path(self, tmp_project, tmp_path):
        other = tmp_path / "other.json"
        other.write_text(json.dumps({"log_dir": "/elsewhere"}), encoding="utf-8")
        assert resolve_config(_args(config=str(other)))["log_dir"] == "/elsewhere"

    def test_hyphenated_json_keys(self, tmp_project):
        (tmp_project / ".fanlog.json").write_text(
            json.dumps({"log-dir": "hyphen"}), encoding="utf-8")
        assert resolve_config(_args())["log_dir"] == "hyphen"

    def test_no_args(self, tmp_project):
        assert resolve_config()["environment"] == "debug"


class TestEnvironment:
    """is_debug_environment()."""

    @pytest.mark.parametrize("value,expected", [
        ("debug", True), ("DEBUG", True), ("release", False),
        (" Release ", False),
    ])
    def test_names(self, value, expected):
        assert is_debug_environment(value) is expected

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown environment"):
            is_debug_environment("staging")

    def test_reads_env_var(self, monkeypatch):
        monkeypatch.setenv("FANLOG_ENV", "release")
        assert is_debug_environment() is False
        monkeypatch.delenv("FANLOG_ENV")
        assert is_debug_environment() is True


class TestSaving:
    """save_project_config()."""

    def test_roundtrip(self, tmp_project):
        data = {"environment": "release", "routes": ["console"]}
        path = save_project_config(data)
        assert path.resolve() == (tmp_project / ".fanlog.json").resolve()
        assert json.loads(path.read_text(encoding="utf-8")) == data
        assert path.read_text(encoding="utf-8").endswith("\n")
