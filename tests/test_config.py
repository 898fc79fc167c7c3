"""Tests for gostat.config."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from gostat.config import DEFAULT_CONFIG, MIN_UPDATE_INTERVAL, load_config


class TestLoadConfigDefaults:
    def test_defaults_returned_when_file_missing(self, tmp_path: Path) -> None:
        cfg = load_config(tmp_path / "nonexistent.toml")
        assert cfg == DEFAULT_CONFIG

    def test_defaults_are_copied(self, tmp_path: Path) -> None:
        cfg = load_config(tmp_path / "nonexistent.toml")
        cfg["update_interval"] = 42.0
        assert DEFAULT_CONFIG["update_interval"] == 1.0


class TestTomlOverlay:
    def test_overrides_interval(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "config.toml"
        toml_file.write_text("update_interval = 2.5\n")
        cfg = load_config(toml_file)
        assert cfg["update_interval"] == 2.5
        # Other settings remain at defaults
        assert cfg["docker_timeout"] == 5.0
        assert cfg["log_level"] == "WARNING"

    def test_integer_interval_coerced(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "config.toml"
        toml_file.write_text("update_interval = 3\ndocker_timeout = 2\n")
        cfg = load_config(toml_file)
        assert cfg["update_interval"] == 3.0
        assert isinstance(cfg["docker_timeout"], float)

    def test_log_level_case_insensitive(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "config.toml"
        toml_file.write_text('log_level = "debug"\n')
        assert load_config(toml_file)["log_level"] == "DEBUG"


class TestValidation:
    @pytest.mark.parametrize("interval", ["0", "0.01", "-1"])
    def test_interval_clamped_to_minimum(self, tmp_path: Path, interval: str) -> None:
        toml_file = tmp_path / "config.toml"
        toml_file.write_text(f"update_interval = {interval}\n")
        assert load_config(toml_file)["update_interval"] == MIN_UPDATE_INTERVAL

    def test_non_numeric_interval_falls_back(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "config.toml"
        toml_file.write_text('update_interval = "fast"\n')
        assert load_config(toml_file)["update_interval"] == DEFAULT_CONFIG["update_interval"]

    def test_unknown_log_level_falls_back(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "config.toml"
        toml_file.write_text('log_level = "LOUD"\n')
        assert load_config(toml_file)["log_level"] == "WARNING"

    def test_unknown_keys_ignored(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        toml_file = tmp_path / "config.toml"
        toml_file.write_text("refresh_colour = 3\nupdate_interval = 2.0\n")
        with caplog.at_level(logging.WARNING, logger="gostat.config"):
            cfg = load_config(toml_file)
        assert "refresh_colour" not in cfg
        assert cfg["update_interval"] == 2.0
        assert "refresh_colour" in caplog.text


class TestInvalidFiles:
    def test_invalid_toml_uses_defaults(self, tmp_path: Path) -> None:
        bad_file = tmp_path / "bad.toml"
        bad_file.write_text("this is [not valid toml\n")
        assert load_config(bad_file) == DEFAULT_CONFIG

    def test_directory_path_uses_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path) == DEFAULT_CONFIG
