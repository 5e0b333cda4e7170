"""Tests for runtime configuration and app data paths."""

from __future__ import annotations

import logging

from locaprox import paths
from locaprox.logging_config import configure_logging
from locaprox.utils.config_store import (
    RuntimeSettings,
    load_runtime_settings,
    save_config_data,
    save_runtime_settings,
)


def test_runtime_settings_round_trip(tmp_path):
    config_path = tmp_path / "config.json"
    save_config_data(config_path, {"other": 1})
    save_runtime_settings(
        config_path, RuntimeSettings(database_path=str(tmp_path / "x.db"), log_level="DEBUG")
    )

    loaded = load_runtime_settings(config_path)
    assert loaded.database_path == str(tmp_path / "x.db")
    assert loaded.log_level == "DEBUG"
    assert '"other": 1' in config_path.read_text(encoding="utf-8")


def test_malformed_config_uses_defaults(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json", encoding="utf-8")
    assert load_runtime_settings(config_path) == RuntimeSettings()
    assert load_runtime_settings(tmp_path / "missing.json") == RuntimeSettings()


def test_home_override(tmp_path, monkeypatch):
    monkeypatch.setenv("LOCAPROX_HOME", str(tmp_path))
    assert paths.get_db_path().parent == paths.get_app_data_dir()
    assert paths.get_logs_dir().is_dir()
    assert paths.get_config_path().name == "config.json"
    assert str(paths.get_app_data_dir()).startswith(str(tmp_path))


def test_configure_logging_accepts_level_names(tmp_path):
    configure_logging("debug", log_dir=tmp_path)
    root = logging.getLogger()
    try:
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
    finally:
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)
