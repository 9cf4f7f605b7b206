# ==============================================================================
# GPL2ASE - CONFIGURATION MODULE
# ==============================================================================
# Centralized configuration management for the converter.
#
# This module handles:
#   - Loading/saving configuration from a JSON file
#   - Default values for all settings
#   - Validation of values read from disk or set from the CLI
#
# Configuration is stored in: <user data dir>/config.json (see Paths)
#
# Usage:
#   from gpl2ase.core.config import Config
#   config = Config()
#   config.load()
#   print(config.palette_capacity)
#   config.generate_preview = True
#   config.save()
# ==============================================================================

import os
import json
from typing import Any, Callable, Dict, Optional

from .paths import Paths


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================
# These are used when no config file exists or when values are missing.

DEFAULT_CONFIG = {
    # -------------------------------------------------------------------------
    # CONVERSION
    # -------------------------------------------------------------------------
    # Maximum number of colors read from a .gpl file (0 = no limit)
    "palette_capacity": 2048,

    # Replace an existing .ase file with the same name
    "overwrite_existing": True,

    # -------------------------------------------------------------------------
    # PREVIEW
    # -------------------------------------------------------------------------
    # Write a PNG swatch sheet next to each converted archive
    "generate_preview": False,

    # Preview cell size (pixels)
    "preview_cell_size": 16,

    # -------------------------------------------------------------------------
    # HISTORY
    # -------------------------------------------------------------------------
    # Record every conversion in the history database
    "record_history": True,

    # Path to SQLite database (empty = default location in user data dir)
    "database_path": "",

    # -------------------------------------------------------------------------
    # ADVANCED
    # -------------------------------------------------------------------------
    # Print [DEBUG] messages
    "debug_mode": False,
}


def _capacity(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("palette_capacity must be an integer")
    value = int(value)
    if value < 0:
        raise ValueError("palette_capacity must be >= 0 (0 = no limit)")
    return value


def _cell_size(value: Any) -> int:
    return max(4, min(128, int(value)))


def _flag(value: Any) -> bool:
    if not isinstance(value, (bool, int)):
        raise TypeError(f"expected true/false, got {value!r}")
    return bool(value)


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {value!r}")
    return value


# Normalizers applied to values loaded from disk and set through properties
VALIDATORS: Dict[str, Callable[[Any], Any]] = {
    "palette_capacity": _capacity,
    "overwrite_existing": _flag,
    "generate_preview": _flag,
    "preview_cell_size": _cell_size,
    "record_history": _flag,
    "database_path": _text,
    "debug_mode": _flag,
}


# ==============================================================================
# CONFIGURATION CLASS
# ==============================================================================
class Config:
    """
    Configuration manager for GPL2ASE.

    Handles loading, saving, and accessing converter settings.
    Settings are stored in a JSON file and can be accessed as
    properties on this object.

    Attributes:
        config_path: Path to the configuration file
        data: Dictionary containing all settings

    Example:
        >>> config = Config("settings.json")
        >>> config.load()
        >>> config.palette_capacity = 4096
        >>> config.save()
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to config file. If None, uses Paths.get_config_path().
        """
        self.config_path = str(config_path) if config_path else Paths.get_config_path()

        # Initialize with defaults
        self.data: Dict[str, Any] = DEFAULT_CONFIG.copy()

        # Track if config has been modified
        self._modified = False

    # -------------------------------------------------------------------------
    # LOADING AND SAVING
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """
        Load configuration from file.

        If the file doesn't exist or is not valid JSON, defaults are used.
        Unknown keys are ignored and invalid values keep their default.

        Returns:
            True if file was loaded, False if using defaults
        """
        if not os.path.isfile(self.config_path):
            return False

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            print(f"[ERROR] Invalid config file {self.config_path}: {e}")
            return False
        except OSError as e:
            print(f"[ERROR] Failed to load config: {e}")
            return False

        if not isinstance(loaded, dict):
            print(f"[ERROR] Invalid config file {self.config_path}: expected a JSON object")
            return False

        # Merge with defaults (so new settings get default values)
        for key, value in loaded.items():
            if key not in self.data:
                continue
            try:
                self.data[key] = VALIDATORS[key](value)
            except (TypeError, ValueError) as e:
                print(f"[WARN] Ignoring config value {key}={value!r}: {e}")

        self._modified = False
        return True

    def save(self) -> bool:
        """
        Save configuration to file.

        Creates the directory if it doesn't exist.

        Returns:
            True if saved successfully
        """
        try:
            directory = os.path.dirname(self.config_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=4, sort_keys=True)

            self._modified = False
            return True

        except OSError as e:
            print(f"[ERROR] Failed to save config: {e}")
            return False

    def reset_to_defaults(self):
        """Reset all settings to their default values."""
        self.data = DEFAULT_CONFIG.copy()
        self._modified = True

    def copy(self) -> 'Config':
        """Independent copy, for one-off overrides that must not leak."""
        clone = Config(self.config_path)
        clone.data = dict(self.data)
        clone._modified = self._modified
        return clone

    @property
    def modified(self) -> bool:
        """Whether settings changed since the last load/save."""
        return self._modified

    # -------------------------------------------------------------------------
    # PROPERTY ACCESS
    # -------------------------------------------------------------------------

    @property
    def palette_capacity(self) -> int:
        """Get the color limit (0 = no limit)."""
        return self.data.get('palette_capacity', 2048)

    @palette_capacity.setter
    def palette_capacity(self, value: int):
        self.set('palette_capacity', value)

    @property
    def capacity_limit(self) -> Optional[int]:
        """Color limit as the parser expects it: None when unlimited."""
        return self.palette_capacity or None

    @property
    def overwrite_existing(self) -> bool:
        return self.data.get('overwrite_existing', True)

    @overwrite_existing.setter
    def overwrite_existing(self, value: bool):
        self.set('overwrite_existing', value)

    @property
    def generate_preview(self) -> bool:
        """Check if PNG previews are written."""
        return self.data.get('generate_preview', False)

    @generate_preview.setter
    def generate_preview(self, value: bool):
        self.set('generate_preview', value)

    @property
    def preview_cell_size(self) -> int:
        """Get preview cell size in pixels."""
        return self.data.get('preview_cell_size', 16)

    @preview_cell_size.setter
    def preview_cell_size(self, value: int):
        self.set('preview_cell_size', value)

    @property
    def record_history(self) -> bool:
        return self.data.get('record_history', True)

    @record_history.setter
    def record_history(self, value: bool):
        self.set('record_history', value)

    @property
    def database_path(self) -> str:
        """Get the history database path (falls back to the user data dir)."""
        return self.data.get('database_path') or Paths.get_database_path()

    @database_path.setter
    def database_path(self, value: str):
        self.set('database_path', value)

    @property
    def debug_mode(self) -> bool:
        """Check if debug mode is enabled."""
        return self.data.get('debug_mode', False)

    @debug_mode.setter
    def debug_mode(self, value: bool):
        self.set('debug_mode', value)

    # -------------------------------------------------------------------------
    # GENERIC ACCESS
    # -------------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            The configuration value
        """
        return self.data.get(key, default)

    def set(self, key: str, value: Any):
        """
        Set a configuration value.

        Known keys are validated; unknown keys are stored as-is.

        Raises:
            ValueError, TypeError: The value is invalid for a known key
        """
        if key in VALIDATORS:
            value = VALIDATORS[key](value)
        self.data[key] = value
        self._modified = True

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access: config['key']"""
        return self.data[key]

    def __setitem__(self, key: str, value: Any):
        """Allow dictionary-style setting: config['key'] = value"""
        self.set(key, value)


# ==============================================================================
# GLOBAL CONFIG INSTANCE
# ==============================================================================
# This provides a singleton-like access to configuration

_global_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Creates and loads config on first call.

    Returns:
        The global Config instance
    """
    global _global_config

    if _global_config is None:
        _global_config = Config()
        _global_config.load()

    return _global_config
