from dataclasses import dataclass, field, is_dataclass
from pathlib import Path
import sys
import tomllib
from typing import Any, ClassVar, TypeVar

from loguru import logger

# --- Constants ---
APP_NAME = "coindetails"
# Use a platform-agnostic user config directory
if sys.platform == "win32":
    CONFIG_DIR = Path.home() / "AppData" / "Roaming" / APP_NAME
else:
    CONFIG_DIR = Path.home() / ".config" / APP_NAME

CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_CONFIG_TEXT = """\
# CoinDetails Configuration File
# Add your settings overrides here, for example:
#
# [display]
# default_currency = "EUR"
# yesterday_rate_index = 1
"""

# --- Dataclass Models for Settings ---
T = TypeVar("T")


@dataclass
class GeneralSettings:
    """General application settings."""

    log_level_console: str = "INFO"
    log_level_file: str = "DEBUG"
    log_directory: str = str(CONFIG_DIR / "logs")


@dataclass
class DisplaySettings:
    """Settings that shape converted and formatted values."""

    default_currency: str = "USD"
    # Position in the newest-first rate series that holds the rate one day
    # before the most recent sample. Depends on the provider's sampling cadence.
    yesterday_rate_index: int = 1
    missing_placeholder: str = "—"
    chart_venue: str = "Simex"


@dataclass
class PreferenceSettings:
    """Settings for the last-selected-currency store."""

    preferences_file: str = str(CONFIG_DIR / "preferences.json")


@dataclass
class Settings:
    """Root container for all application settings."""

    general: GeneralSettings = field(default_factory=GeneralSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    preferences: PreferenceSettings = field(default_factory=PreferenceSettings)

    _instance: ClassVar["Settings | None"] = None

    @classmethod
    def get_instance(cls) -> "Settings":
        """Returns the singleton instance of the Settings object."""
        if cls._instance is None:
            cls._instance = load_config()
        return cls._instance


def _update_dataclass(dc_instance: T, data: dict[str, Any]) -> T:
    """Recursively updates a dataclass instance from a dictionary."""
    for f in field_names(dc_instance):
        if f in data:
            field_value = getattr(dc_instance, f)
            if is_dataclass(field_value):
                if isinstance(data[f], dict):
                    _update_dataclass(field_value, data[f])
                else:
                    logger.warning(f"Ignoring non-table value for section '{f}'.")
            else:
                setattr(dc_instance, f, data[f])
    return dc_instance


def field_names(dc_instance: Any) -> list[str]:
    """Helper to get field names from a dataclass instance."""
    return [f.name for f in dc_instance.__dataclass_fields__.values()]


def load_config(path: Path = CONFIG_FILE) -> Settings:
    """Loads settings from a TOML file, merging them with defaults.

    If the config file does not exist, it creates one with commented defaults.

    Args:
        path: The path to the configuration file.

    Returns:
        A populated Settings object.
    """
    settings_obj = Settings()
    logger.info(f"Loading configuration from '{path}'...")

    if not path.exists():
        logger.warning(f"Configuration file not found. Creating default at '{path}'.")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                f.write(DEFAULT_CONFIG_TEXT)
        except OSError as e:
            logger.error(f"Failed to create default config file: {e}")
        return settings_obj

    try:
        with path.open("rb") as f:
            user_config = tomllib.load(f)
        _update_dataclass(settings_obj, user_config)
        logger.success("Successfully loaded user configuration.")
    except tomllib.TOMLDecodeError as e:
        logger.error(f"Error decoding TOML from '{path}': {e}")
        logger.warning("Using default settings due to configuration error.")
        settings_obj = Settings()
    except OSError as e:
        logger.error(f"Could not read configuration file '{path}': {e}")
        logger.warning("Using default settings due to configuration error.")
        settings_obj = Settings()

    return settings_obj
