"""Tests for locating and reading gamecat.toml."""

from pathlib import Path

import pytest

from gamecat.config.discovery import (
    CONFIG_FILENAME,
    ConfigError,
    ConfigFile,
    ConfigOrigin,
    locate_config,
)


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GAMECAT_CONFIG", raising=False)


class TestLocateConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        cfg = tmp_path / CONFIG_FILENAME
        cfg.write_text("")
        found = locate_config(start=tmp_path)
        assert found == ConfigFile(cfg.resolve(), ConfigOrigin.WALK_UP)

    def test_walks_up(self, tmp_path: Path) -> None:
        cfg = tmp_path / CONFIG_FILENAME
        cfg.write_text("")
        nested = tmp_path / "elden-ring" / "weapons"
        nested.mkdir(parents=True)
        found = locate_config(start=nested)
        assert found is not None
        assert found.path == cfg.resolve()

    def test_nothing_found_means_defaults(self, tmp_path: Path) -> None:
        assert locate_config(start=tmp_path) is None

    def test_flag_wins_over_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        flagged = tmp_path / "flag.toml"
        flagged.write_text("")
        env = tmp_path / "env.toml"
        env.write_text("")
        monkeypatch.setenv("GAMECAT_CONFIG", str(env))
        found = locate_config(flagged, start=tmp_path)
        assert found == ConfigFile(flagged, ConfigOrigin.FLAG)

    def test_env_wins_over_walk_up(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        other = tmp_path / "elsewhere.toml"
        other.write_text("")
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv("GAMECAT_CONFIG", str(other))
        assert locate_config(start=tmp_path) == ConfigFile(other, ConfigOrigin.ENV)

    def test_missing_env_file_is_an_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv("GAMECAT_CONFIG", str(tmp_path / "gone.toml"))
        with pytest.raises(ConfigError, match="from GAMECAT_CONFIG"):
            locate_config(start=tmp_path)

    def test_missing_flag_file_is_an_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="from --config"):
            locate_config(tmp_path / "nope.toml")


class TestReadConfig:
    def test_reads_sections(self, tmp_path: Path) -> None:
        cfg = tmp_path / CONFIG_FILENAME
        cfg.write_text('[registry]\ngames = ["elden-ring"]\n')
        data = ConfigFile(cfg, ConfigOrigin.WALK_UP).read()
        assert data == {"registry": {"games": ["elden-ring"]}}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / CONFIG_FILENAME
        cfg.write_text("[registry\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            ConfigFile(cfg, ConfigOrigin.WALK_UP).read()
