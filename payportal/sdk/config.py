"""Configuration management for Pay Portal.

Machine-specific settings live in settings.json:
   - schedule_year: default rate-schedule year to load
   - social_insurance_mode: 'bracket_table' (default) or 'formula'
   - schedules_dir: directory of custom {year}.yaml rate schedules,
     searched before the packaged ones

Config directory resolution:
1. PAY_PORTAL_CONFIG_PATH environment variable (if set)
2. ~/.config/pay-portal/ (XDG_CONFIG_HOME fallback)
"""

import json
import os
from pathlib import Path
from typing import Any, Optional


APP_NAME = "pay-portal"
SETTINGS_FILENAME = "settings.json"

# Recognized settings.json keys and a short description of each
KNOWN_SETTINGS = {
    "schedule_year": "Default rate-schedule year (e.g. 2025)",
    "social_insurance_mode": "Social-insurance mode: bracket_table or formula",
    "schedules_dir": "Directory of custom {year}.yaml rate schedules",
}


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. PAY_PORTAL_CONFIG_PATH environment variable
    2. ~/.config/pay-portal/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("PAY_PORTAL_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

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
    """Remove a setting. Returns True if the key was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_schedules_dir() -> Optional[Path]:
    """Get the custom rate-schedule directory, if one is configured."""
    custom = get_setting("schedules_dir")
    if not custom:
        return None
    return Path(custom).expanduser()
