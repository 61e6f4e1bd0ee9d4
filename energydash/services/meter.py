"""Meter service for business logic."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from energydash.core.config import settings
from energydash.core.exceptions import PersistenceError
from energydash.models.meter import Meter
from energydash.schemas.meter import MeterCreate
from energydash.services.cumulative_reset import parse_time_of_day
from energydash.services.preferences import get_preferences

logger = logging.getLogger(__name__)


def create_meter(db: Session, meter_data: MeterCreate) -> Meter:
    """
    Create a meter, filling unset validation bounds from site preferences.

    Raises:
        HTTPException: If a meter with the same name exists
        ValidationError: If the reset window times can't be parsed

    """
    existing = db.query(Meter).filter(Meter.name == meter_data.name).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Meter '{meter_data.name}' already exists",
        )

    reset_start = meter_data.cumulative_reset_start or settings.DEFAULT_RESET_START
    reset_end = meter_data.cumulative_reset_end or settings.DEFAULT_RESET_END
    parse_time_of_day(reset_start)
    parse_time_of_day(reset_end)

    prefs = get_preferences(db)

    def _or_default(value, default):
        return default if value is None else value

    db_meter = Meter(
        name=meter_data.name,
        unit_id=meter_data.unit_id,
        cumulative=meter_data.cumulative,
        cumulative_reset=meter_data.cumulative_reset,
        cumulative_reset_start=reset_start,
        cumulative_reset_end=reset_end,
        reading_frequency=_or_default(
            meter_data.reading_frequency, prefs.default_meter_reading_frequency
        ),
        min_value=_or_default(meter_data.min_value, prefs.default_meter_minimum_value),
        max_value=_or_default(meter_data.max_value, prefs.default_meter_maximum_value),
        min_date=_or_default(meter_data.min_date, prefs.default_meter_minimum_date),
        max_date=_or_default(meter_data.max_date, prefs.default_meter_maximum_date),
        reading_gap=_or_default(meter_data.reading_gap, prefs.default_meter_reading_gap),
        max_errors=_or_default(meter_data.max_errors, prefs.default_meter_maximum_errors),
        disable_checks=_or_default(
            meter_data.disable_checks, prefs.default_meter_disable_checks
        ),
    )
    db.add(db_meter)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(f"Failed to create meter: {e}") from e
    db.refresh(db_meter)
    logger.info("Created meter %s (id=%s)", db_meter.name, db_meter.id)
    return db_meter


def get_meter(db: Session, meter_id: int) -> Meter:
    """Get a meter by ID."""
    meter = db.query(Meter).filter(Meter.id == meter_id).first()
    if not meter:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meter not found",
        )
    return meter


def get_meters(db: Session) -> list[Meter]:
    """Get all meters ordered by name."""
    return db.query(Meter).order_by(Meter.name).all()
