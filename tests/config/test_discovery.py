"""Tests for config discovery and loading."""

import tomllib
from pathlib import Path

import pytest

from agentpack.config.discovery import (
    CONFIG_DIRNAME,
    CONFIG_FILENAME,
    find_config,
    read_config,
)


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[build]\ndist_dir = "out"\n')
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv("AGENTPACK_CONFIG", str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv("AGENTPACK_CONFIG", str(tmp_path / "nope.toml"))
        with pytest.raises(FileNotFoundError, match="nope.toml"):
            find_config(tmp_path)

    def test_finds_in_dot_agentpack(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_DIRNAME / CONFIG_FILENAME
        config_file.parent.mkdir()
        config_file.write_text("")
        assert find_config(tmp_path) == config_file

    def test_top_level_file_wins(self, tmp_path: Path) -> None:
        top = tmp_path / CONFIG_FILENAME
        top.write_text("")
        (tmp_path / CONFIG_DIRNAME).mkdir()
        (tmp_path / CONFIG_DIRNAME / CONFIG_FILENAME).write_text("")
        assert find_config(tmp_path) == top


class TestReadConfig:
    def test_reads_sections(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[source]\nrules_file = "RULES.md"\n[build]\nforce = true\n')
        assert read_config(config_file) == {
            "source": {"rules_file": "RULES.md"},
            "build": {"force": True},
        }

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert read_config(config_file) == {}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[build\n")
        with pytest.raises(tomllib.TOMLDecodeError):
            read_config(config_file)
