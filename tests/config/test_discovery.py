"""Tests for poolctl.toml discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from poolctl.config.discovery import CONFIG_FILENAME, find_config


class TestFindConfig:
    def test_found_in_start_dir(self, tmp_path: Path) -> None:
        config = tmp_path / CONFIG_FILENAME
        config.write_text("", encoding="utf-8")
        assert find_config(tmp_path) == config.resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        config = tmp_path / CONFIG_FILENAME
        config.write_text("", encoding="utf-8")
        nested = tmp_path / "pools" / "prod"
        nested.mkdir(parents=True)
        assert find_config(nested) == config.resolve()

    def test_not_found(self, tmp_path: Path) -> None:
        # tmp_path lives under the system temp dir, which has no poolctl.toml
        assert find_config(tmp_path) is None

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("", encoding="utf-8")
        other = tmp_path / "other.toml"
        other.write_text("", encoding="utf-8")
        monkeypatch.setenv("POOLCTL_CONFIG", str(other))
        assert find_config(tmp_path) == other

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("", encoding="utf-8")
        monkeypatch.setenv("POOLCTL_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None
