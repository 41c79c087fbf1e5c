"""Configuration file management for famfin."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG: dict[str, Any] = {
    "start_year": 2025,
    "start_month": 11,
    "months": 12,
    "ai_model": "gemini-2.5-flash",
    "income": {
        "fixed_salary_1": 3500.0,
        "variable_salary_1": 0.0,
        "fixed_salary_2": 4000.0,
        "fixed_salary_3": 2500.0,
        "variable_salary_2": 0.0,
        "others": 0.0,
    },
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "famfin" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(DEFAULT_CONFIG, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file, filling in defaults.

    A missing file yields the defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        ValueError: If start_month or months are out of range.
    """
    if config_path is None:
        config_path = get_config_path()

    config = {**DEFAULT_CONFIG, "income": dict(DEFAULT_CONFIG["income"])}
    if config_path.exists():
        with open(config_path, "rb") as f:
            config.update(tomllib.load(f))

    if not 1 <= int(config["start_month"]) <= 12:
        raise ValueError(f"start_month must be 1-12, got {config['start_month']}")
    if int(config["months"]) <= 0:
        raise ValueError(f"months must be positive, got {config['months']}")

    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)
