"""Meter routes, including reading ingestion."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from energydash.core.database import get_db
from energydash.schemas.meter import MeterCreate, MeterResponse, ResetCheckResponse
from energydash.schemas.reading import (
    IngestResult,
    ReadingCreate,
    ReadingHistory,
    ReadingResponse,
)
from energydash.services import meter as meter_service
from energydash.services import readings as reading_service
from energydash.services.cumulative_reset import is_reset_allowed

router = APIRouter(prefix="/meters", tags=["meters"])


@router.post("/", response_model=MeterResponse, status_code=status.HTTP_201_CREATED)
def create_meter(
    meter_data: MeterCreate,
    db: Session = Depends(get_db),
):
    """Create a meter; omitted bounds default to the site preferences."""
    return meter_service.create_meter(db, meter_data)


@router.get("/", response_model=list[MeterResponse])
def list_meters(db: Session = Depends(get_db)):
    """List all meters."""
    return meter_service.get_meters(db)


@router.get("/{meter_id}", response_model=MeterResponse)
def get_meter(meter_id: int, db: Session = Depends(get_db)):
    """Get a meter by ID."""
    return meter_service.get_meter(db, meter_id)


@router.get("/{meter_id}/reset-allowed", response_model=ResetCheckResponse)
def check_reset_allowed(
    meter_id: int,
    start_timestamp: datetime = Query(..., description="Start of the reading to check"),
    db: Session = Depends(get_db),
) -> ResetCheckResponse:
    """Check whether a reading starting at this time falls in the meter's reset window."""
    meter = meter_service.get_meter(db, meter_id)
    allowed = is_reset_allowed(
        meter.cumulative_reset,
        meter.cumulative_reset_start,
        meter.cumulative_reset_end,
        start_timestamp,
    )
    return ResetCheckResponse(meter_id=meter.id, start_timestamp=start_timestamp, allowed=allowed)


@router.post(
    "/{meter_id}/readings",
    response_model=IngestResult,
    status_code=status.HTTP_201_CREATED,
)
def ingest_readings(
    meter_id: int,
    readings: list[ReadingCreate],
    db: Session = Depends(get_db),
) -> IngestResult:
    """
    Ingest a batch of readings for a meter.

    Cumulative meters store the difference between consecutive readings; a
    drop is only accepted inside the meter's daily reset window.
    """
    return reading_service.ingest_readings(db, meter_id, readings)


@router.get("/{meter_id}/readings", response_model=ReadingHistory)
def get_reading_history(
    meter_id: int,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
) -> ReadingHistory:
    """Get reading history for a meter with pagination."""
    meter_service.get_meter(db, meter_id)
    readings, total = reading_service.get_readings_history(db, meter_id, limit, offset)
    return ReadingHistory(
        meter_id=meter_id,
        readings=[ReadingResponse.model_validate(r) for r in readings],
        total=total,
        limit=limit,
        offset=offset,
    )
