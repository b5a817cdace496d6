"""
Picker configuration and ambient settings.

Public API:
    PickerConfig: Validated configuration of one picker
    PickerSettings: Environment/YAML backed defaults
    load_settings: Load PickerSettings from a YAML file and the environment
    PickerError: Base exception
    PickerConfigError: Invalid configuration value
    PickerSettingsError: Settings file could not be loaded
"""

from .exceptions import PickerConfigError, PickerError, PickerSettingsError
from .loader import PickerSettings, load_settings
from .models import PickerConfig

__all__ = [
    "PickerConfig",
    "PickerConfigError",
    "PickerError",
    "PickerSettings",
    "PickerSettingsError",
    "load_settings",
]
