"""Reading Pydantic schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, model_validator


class ReadingCreate(BaseModel):
    """Schema for one incoming reading.

    For cumulative meters ``reading`` is the counter value at the end of the
    interval; otherwise it is the usage over the interval.
    """

    model_config = {"allow_inf_nan": False}

    reading: float
    start_timestamp: datetime
    end_timestamp: datetime

    @model_validator(mode="after")
    def check_interval(self) -> "ReadingCreate":
        """Ensure the interval does not run backwards."""
        # Readings are kept as wall-clock time, so offsets play no part here
        if self.end_timestamp.replace(tzinfo=None) < self.start_timestamp.replace(tzinfo=None):
            raise ValueError("end_timestamp must not be before start_timestamp")
        return self


class ReadingResponse(BaseModel):
    """Schema for stored reading response."""

    meter_id: int
    reading: float
    start_timestamp: datetime
    end_timestamp: datetime

    model_config = {"from_attributes": True}


class IngestResult(BaseModel):
    """Outcome of ingesting a batch of readings."""

    meter_id: int
    inserted: int
    dropped: int
    resets: int


class ReadingHistory(BaseModel):
    """Schema for paginated meter reading history."""

    meter_id: int
    readings: list[ReadingResponse]
    total: int
    limit: int
    offset: int
