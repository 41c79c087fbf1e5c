"""Tests for famfin.config."""

import stat
from pathlib import Path

import pytest
import tomli_w

from famfin.config import DEFAULT_CONFIG, create_default_config, get_config_path, load_config, save_config


class TestGetConfigPath:
    """Tests for get_config_path."""

    def test_respects_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / "famfin" / "config.toml"


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "missing.toml")

        assert config == DEFAULT_CONFIG

    def test_file_values_override_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        with open(path, "wb") as f:
            tomli_w.dump({"months": 24, "income": {"salary": 5000.0}}, f)

        config = load_config(path)

        assert config["months"] == 24
        assert config["income"] == {"salary": 5000.0}
        assert config["start_year"] == DEFAULT_CONFIG["start_year"]

    def test_defaults_are_not_shared(self, tmp_path: Path) -> None:
        """Should not let callers mutate the default income."""
        config = load_config(tmp_path / "missing.toml")
        config["income"]["extra"] = 1.0

        assert "extra" not in DEFAULT_CONFIG["income"]

    def test_invalid_start_month(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        save_config({"start_month": 13}, path)

        with pytest.raises(ValueError):
            load_config(path)

    def test_invalid_months(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        save_config({"months": 0}, path)

        with pytest.raises(ValueError):
            load_config(path)


class TestCreateDefaultConfig:
    """Tests for create_default_config."""

    def test_writes_defaults_with_private_permissions(self, tmp_path: Path) -> None:
        path = tmp_path / "famfin" / "config.toml"

        create_default_config(path)

        assert load_config(path) == DEFAULT_CONFIG
        assert stat.S_IMODE(path.stat().st_mode) == 0o600
