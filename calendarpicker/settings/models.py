"""
Picker configuration model using Pydantic for validation and type safety.

``PickerConfig`` gathers everything a ``DatePicker`` is built from: locale,
week start, selection mode, visible months, the initial value and, in
controlled mode, the externally owned value plus its change handler.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.models import DateRange, SelectionMode
from .exceptions import PickerConfigError

logger = logging.getLogger(__name__)


def _coerce_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise PickerConfigError(
            f"{field_name} must be an integer", field_name=field_name, field_value=value
        )
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise PickerConfigError(
            f"{field_name} must be an integer", field_name=field_name, field_value=value
        ) from e


class PickerConfig(BaseModel):
    """Configuration of one date picker.

    Attributes:
        locale: Locale used for weekday/month names ("default" = process locale)
        default_calendar_month: Any date inside the month shown first
        months_visible: Number of months covered by the grid
        week_start_index: First day of the week, 0=Sunday through 6=Saturday
        type: Single date or range selection
        default_value: Initial value in uncontrolled mode
        value: Externally owned value; supplying it enables controlled mode
        on_value_change: Called with each proposed value in controlled mode

    Example:
        >>> config = PickerConfig(type="range", week_start_index="1")
        >>> config.week_start_index
        1
        >>> config.is_controlled
        False
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    locale: str = Field(default="default", description="Locale for display names")
    default_calendar_month: date = Field(
        default_factory=date.today, description="Month displayed first"
    )
    months_visible: int = Field(default=1, description="Number of visible months")
    week_start_index: int = Field(default=0, description="Week start, 0=Sunday")
    type: SelectionMode = Field(default=SelectionMode.SINGLE, description="single or range")
    default_value: Any = Field(default=None, description="Initial uncontrolled value")
    value: Any = Field(default=None, description="Controlled value")
    on_value_change: Optional[Callable[[Any], None]] = Field(
        default=None, description="Controlled-mode change handler"
    )

    @field_validator("locale", mode="before")
    @classmethod
    def validate_locale(cls, v: Optional[str]) -> str:
        if v is None or not str(v).strip():
            return "default"
        return str(v).strip()

    @field_validator("default_calendar_month", mode="before")
    @classmethod
    def validate_calendar_month(cls, v: Any) -> Any:
        if v is None:
            return date.today()
        if isinstance(v, datetime):
            return v.date()
        return v

    @field_validator("months_visible", mode="before")
    @classmethod
    def validate_months_visible(cls, v: Any) -> int:
        """Accept integers and numeral strings of at least 1.

        Raises:
            PickerConfigError: If the value is not a positive integer
        """
        months = _coerce_int(v, "months_visible")
        if months < 1:
            raise PickerConfigError(
                "months_visible must be at least 1", field_name="months_visible", field_value=v
            )
        return months

    @field_validator("week_start_index", mode="before")
    @classmethod
    def validate_week_start_index(cls, v: Any) -> int:
        """Accept integers and numeral strings in 0..6.

        Raises:
            PickerConfigError: If the index is outside 0..6
        """
        index = _coerce_int(v, "week_start_index")
        if not 0 <= index <= 6:
            raise PickerConfigError(
                "week_start_index must be between 0 (Sunday) and 6 (Saturday)",
                field_name="week_start_index",
                field_value=v,
            )
        return index

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def validate_values(self) -> "PickerConfig":
        """Check that concrete values match the selection mode.

        Raises:
            PickerConfigError: If a range is given in single mode or a bare
                date in range mode
        """
        for field_name in ("default_value", "value"):
            candidate = getattr(self, field_name)
            if candidate is None or isinstance(candidate, str):
                continue
            if self.type is SelectionMode.SINGLE and not isinstance(candidate, date):
                raise PickerConfigError(
                    "single mode expects a date, datetime or dynamic token",
                    field_name=field_name,
                    field_value=candidate,
                )
            if self.type is SelectionMode.RANGE and not isinstance(candidate, DateRange):
                raise PickerConfigError(
                    "range mode expects a DateRange or dynamic token",
                    field_name=field_name,
                    field_value=candidate,
                )
        return self

    @property
    def is_controlled(self) -> bool:
        """Controlled mode is on whenever ``value`` was supplied, even as None."""
        return "value" in self.model_fields_set

    @property
    def initial_value(self) -> Any:
        return self.value if self.is_controlled else self.default_value
