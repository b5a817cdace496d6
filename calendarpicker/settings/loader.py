"""Ambient picker settings from environment variables and YAML files."""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.models import SelectionMode
from .exceptions import PickerSettingsError
from .models import PickerConfig

logger = logging.getLogger(__name__)

YAML_SECTION = "picker"


class PickerSettings(BaseSettings):
    """Installation-wide picker defaults with environment variable support.

    Every field can be set through a ``CALENDARPICKER_`` prefixed environment
    variable, e.g. ``CALENDARPICKER_WEEK_START_INDEX=1``.
    """

    locale: str = Field(default="default", description="Locale for display names")
    week_start_index: int = Field(default=0, ge=0, le=6, description="Week start, 0=Sunday")
    months_visible: int = Field(default=1, ge=1, description="Number of visible months")
    type: SelectionMode = Field(default=SelectionMode.SINGLE, description="single or range")
    log_level: str = Field(default="INFO", description="Root log level")
    debug: bool = Field(default=False, description="Enable debug logging for calendarpicker")

    model_config = SettingsConfigDict(
        env_prefix="CALENDARPICKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def to_config(self, **overrides: Any) -> PickerConfig:
        """Build a PickerConfig from these defaults.

        Args:
            **overrides: PickerConfig fields that take precedence

        Returns:
            The picker configuration
        """
        values: dict[str, Any] = {
            "locale": self.locale,
            "week_start_index": self.week_start_index,
            "months_visible": self.months_visible,
            "type": self.type,
        }
        values.update(overrides)
        return PickerConfig(**values)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise PickerSettingsError(
            "Failed to read settings file", operation="read", file_path=str(path), original_error=e
        ) from e
    except yaml.YAMLError as e:
        raise PickerSettingsError(
            "Settings file is not valid YAML",
            operation="parse",
            file_path=str(path),
            original_error=e,
        ) from e

    if not data:
        return {}
    if not isinstance(data, dict):
        raise PickerSettingsError(
            "Settings file must contain a mapping", operation="parse", file_path=str(path)
        )

    section = data.get(YAML_SECTION, {})
    if not isinstance(section, dict):
        raise PickerSettingsError(
            f"'{YAML_SECTION}' section must be a mapping", operation="parse", file_path=str(path)
        )
    return section


def load_settings(
    config_file: Optional[Union[str, Path]] = None, **overrides: Any
) -> PickerSettings:
    """Load picker settings.

    Precedence, highest first: ``overrides``, the YAML ``picker:`` section,
    environment variables, field defaults.

    Args:
        config_file: Optional YAML file path
        **overrides: Explicit setting values

    Returns:
        Loaded settings

    Raises:
        PickerSettingsError: If the file cannot be read or holds invalid values
    """
    values: dict[str, Any] = {}
    if config_file is not None:
        path = Path(config_file)
        values.update(_read_yaml(path))
        logger.debug(f"Loaded {len(values)} picker settings from {path}")

    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return PickerSettings(**values)
    except ValidationError as e:
        raise PickerSettingsError(
            "Invalid picker settings",
            operation="validate",
            file_path=str(config_file) if config_file else None,
            original_error=e,
        ) from e
