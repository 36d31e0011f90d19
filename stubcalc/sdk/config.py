"""Configuration management for Stub Calc.

Configuration lives in a single settings.json file:

- tax_year: default tax table version (e.g., "2024")
- tax_rules_dir: directory of YYYY.yaml tax tables (optional, defaults
  to the tables shipped with the package)
- default_output_format: "table" or "json" for `stub-calc generate`

Config directory resolution:
1. STUB_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/stub-calc/ (XDG_CONFIG_HOME fallback)

Employee profiles passed to the CLI are YAML or JSON files.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml


APP_NAME = "stub-calc"
SETTINGS_FILENAME = "settings.json"

DEFAULT_TAX_YEAR = "2024"
DEFAULT_OUTPUT_FORMAT = "table"

# Tables shipped with the package
PACKAGED_TAX_RULES_DIR = Path(__file__).parent.parent / "tax_rules"

# Settings accepted by `stub-calc settings set`
KNOWN_SETTINGS = ("tax_year", "tax_rules_dir", "default_output_format")


class ConfigError(Exception):
    """Raised when a settings or profile file cannot be read."""
    pass


def configure_logging() -> None:
    """Configure root logging from the LOG_LEVEL environment variable.

    Called by the CLI entry point only; library code just logs.
    """
    level_name = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. STUB_CALC_CONFIG_PATH environment variable
    2. ~/.config/stub-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("STUB_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigError: If the file exists but is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigError(f"{settings_file} must contain a JSON object")
    return settings


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting from settings.json.

    Returns:
        True if the key was present and removed
    """
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_default_tax_year() -> str:
    """Tax table version used when none is requested explicitly."""
    return str(get_setting("tax_year", DEFAULT_TAX_YEAR))


def get_tax_rules_dir() -> Path:
    """Directory holding the YYYY.yaml tax tables.

    Uses the tax_rules_dir setting when present, else the tables
    packaged with stubcalc.
    """
    custom = get_setting("tax_rules_dir")
    if custom:
        return Path(custom).expanduser()
    return PACKAGED_TAX_RULES_DIR


def get_default_output_format() -> str:
    """Output format for `stub-calc generate` when --format is omitted."""
    return get_setting("default_output_format", DEFAULT_OUTPUT_FORMAT)


def load_profile_file(path: Path) -> dict:
    """Load an employee profile from a YAML or JSON file.

    Args:
        path: Path to a .yaml/.yml or .json file

    Returns:
        Raw profile dict (not yet normalized)

    Raises:
        ConfigError: If the file is missing or not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Profile file not found: {path}")

    try:
        with open(path, "r") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not parse profile {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Profile {path} must be a mapping of fields")
    return data
