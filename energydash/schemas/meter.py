"""Meter Pydantic schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from energydash.schemas.preferences import to_naive_utc


class MeterCreate(BaseModel):
    """Schema for creating a meter; unset bounds come from site preferences."""

    model_config = {"allow_inf_nan": False}

    name: str = Field(..., min_length=1, max_length=100)
    unit_id: int | None = None
    cumulative: bool = False
    cumulative_reset: bool = False
    cumulative_reset_start: str | None = None
    cumulative_reset_end: str | None = None
    reading_frequency: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    min_date: datetime | None = None
    max_date: datetime | None = None
    reading_gap: float | None = None
    max_errors: int | None = None
    disable_checks: bool | None = None

    @field_validator("min_date", "max_date")
    @classmethod
    def as_naive_utc(cls, v: datetime | None) -> datetime | None:
        """Store bound dates as naive UTC, like the site defaults."""
        return None if v is None else to_naive_utc(v)


class MeterResponse(BaseModel):
    """Schema for meter response."""

    id: int
    name: str
    unit_id: int | None
    cumulative: bool
    cumulative_reset: bool
    cumulative_reset_start: str
    cumulative_reset_end: str
    reading_frequency: str
    min_value: float
    max_value: float
    min_date: datetime
    max_date: datetime
    reading_gap: float
    max_errors: int
    disable_checks: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class ResetCheckResponse(BaseModel):
    """Schema for whether a reading start falls in a meter's reset window."""

    meter_id: int
    start_timestamp: datetime
    allowed: bool
