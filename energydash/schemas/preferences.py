"""Preferences Pydantic schemas for request/response validation."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from energydash.core.config import settings
from energydash.models.enums import AreaUnitType, ChartType, LanguageType

_duration = TypeAdapter(timedelta)


def parse_reading_frequency(value: str) -> timedelta | None:
    """Parse an ``HH:MM:SS`` or ISO 8601 (``PT15M``) duration; None if invalid."""
    try:
        return _duration.validate_python(value)
    except PydanticValidationError:
        return None


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC."""
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


class PreferencesBase(BaseModel):
    """Fields shared by preference requests and responses."""

    model_config = {"allow_inf_nan": False}

    display_title: str = Field("", max_length=50)
    default_chart_to_render: ChartType = ChartType.LINE
    default_bar_stacking: bool = False
    default_area_normalization: bool = False
    default_area_unit: AreaUnitType = AreaUnitType.METERS
    default_language: LanguageType = LanguageType.EN
    default_timezone: str | None = None
    default_warning_file_size: float
    default_file_size_limit: float
    default_help_url: str = ""
    default_meter_reading_frequency: str
    default_meter_minimum_value: float
    default_meter_maximum_value: float
    default_meter_minimum_date: datetime
    default_meter_maximum_date: datetime
    default_meter_reading_gap: float
    default_meter_maximum_errors: int
    default_meter_disable_checks: bool = False


class PreferencesUpdate(PreferencesBase):
    """Schema for submitting the full set of preferences.

    Every check mirrors a field of the admin form; ``invalid_fields`` lists
    the ones that fail so the form can flag them individually.
    """

    @field_validator("default_meter_minimum_date", "default_meter_maximum_date")
    @classmethod
    def as_naive_utc(cls, v: datetime) -> datetime:
        """Store bound dates as naive UTC."""
        return to_naive_utc(v)

    @field_validator("default_timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Empty means no default; anything else must be a known zone."""
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone '{v}'") from e
        return v.strip()

    def invalid_reading_frequency(self) -> bool:
        frequency = parse_reading_frequency(self.default_meter_reading_frequency)
        return frequency is None or frequency.total_seconds() <= 0

    def invalid_minimum_value(self) -> bool:
        return (
            self.default_meter_minimum_value < settings.MIN_VAL
            or self.default_meter_minimum_value > self.default_meter_maximum_value
        )

    def invalid_maximum_value(self) -> bool:
        return (
            self.default_meter_maximum_value > settings.MAX_VAL
            or self.default_meter_minimum_value > self.default_meter_maximum_value
        )

    def invalid_minimum_date(self) -> bool:
        return (
            self.default_meter_minimum_date < settings.MIN_DATE
            or self.default_meter_minimum_date > self.default_meter_maximum_date
        )

    def invalid_maximum_date(self) -> bool:
        return (
            self.default_meter_maximum_date > settings.MAX_DATE
            or self.default_meter_maximum_date < self.default_meter_minimum_date
        )

    def invalid_reading_gap(self) -> bool:
        return self.default_meter_reading_gap < 0

    def invalid_maximum_errors(self) -> bool:
        return not 0 <= self.default_meter_maximum_errors <= settings.MAX_ERRORS

    def invalid_file_size_limit(self) -> bool:
        return self.default_file_size_limit < 0

    def invalid_warning_file_size(self) -> bool:
        return (
            self.default_warning_file_size < 0
            or self.default_warning_file_size > self.default_file_size_limit
        )

    def invalid_fields(self) -> list[str]:
        """Names of the fields whose values fail validation."""
        checks = {
            "default_meter_reading_frequency": self.invalid_reading_frequency,
            "default_meter_minimum_value": self.invalid_minimum_value,
            "default_meter_maximum_value": self.invalid_maximum_value,
            "default_meter_minimum_date": self.invalid_minimum_date,
            "default_meter_maximum_date": self.invalid_maximum_date,
            "default_meter_reading_gap": self.invalid_reading_gap,
            "default_meter_maximum_errors": self.invalid_maximum_errors,
            "default_file_size_limit": self.invalid_file_size_limit,
            "default_warning_file_size": self.invalid_warning_file_size,
        }
        return [name for name, check in checks.items() if check()]

    @model_validator(mode="after")
    def check_bounds(self) -> "PreferencesUpdate":
        """Reject the submission if any field is out of bounds."""
        invalid = self.invalid_fields()
        if invalid:
            raise ValueError(f"Invalid preference values: {', '.join(invalid)}")
        return self


class PreferencesResponse(PreferencesBase):
    """Schema for preferences response."""

    updated_at: datetime

    model_config = {"from_attributes": True}
