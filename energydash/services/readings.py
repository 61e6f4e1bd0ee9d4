"""Reading ingestion: cumulative handling, bound checks and storage."""

import logging
from datetime import datetime
from typing import NamedTuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from energydash.core.exceptions import PersistenceError, ValidationError
from energydash.models.meter import Meter
from energydash.models.reading import Reading
from energydash.schemas.reading import IngestResult, ReadingCreate
from energydash.services.cumulative_reset import is_reset_allowed
from energydash.services.meter import get_meter

logger = logging.getLogger(__name__)


class _Usage(NamedTuple):
    value: float
    start: datetime
    end: datetime


def _wall_clock(value: datetime) -> datetime:
    """Readings are kept in meter local time; drop any offset."""
    return value.replace(tzinfo=None)


def _cumulative_usage(meter: Meter, ordered: list[_Usage]) -> tuple[list[_Usage], int]:
    """
    Turn cumulative counter values into usage per interval.

    The first reading only sets the baseline. A drop is accepted as a
    counter reset when the reading starts inside the meter's reset window,
    in which case the usage is the new counter value.

    Raises:
        ValidationError: On a drop outside the reset window

    """
    usage: list[_Usage] = []
    resets = 0
    for previous, current in zip(ordered, ordered[1:]):
        delta = current.value - previous.value
        if delta < 0:
            if not is_reset_allowed(
                meter.cumulative_reset,
                meter.cumulative_reset_start,
                meter.cumulative_reset_end,
                current.start,
            ):
                raise ValidationError(
                    f"Cumulative reading for meter '{meter.name}' dropped from "
                    f"{previous.value} to {current.value} at {current.start} "
                    "outside the reset window; no readings were stored"
                )
            logger.info("Meter %s reset at %s", meter.name, current.start)
            delta = current.value
            resets += 1
        usage.append(_Usage(delta, current.start, current.end))
    return usage, resets


def _out_of_bounds(meter: Meter, usage: _Usage) -> bool:
    return not (
        meter.min_value <= usage.value <= meter.max_value
        and _wall_clock(meter.min_date) <= usage.start <= _wall_clock(meter.max_date)
    )


def ingest_readings(
    db: Session,
    meter_id: int,
    readings: list[ReadingCreate],
) -> IngestResult:
    """
    Validate a batch of readings for a meter and store the accepted ones.

    Readings outside the meter's value or date bounds are dropped unless
    checks are disabled; dropping more than ``max_errors`` rejects the batch.

    Args:
        db: Database session
        meter_id: Meter ID
        readings: Incoming readings, in any order

    Returns:
        Counts of inserted, dropped and reset readings

    Raises:
        HTTPException: If the meter does not exist
        ValidationError: If the batch is rejected
        PersistenceError: If the readings can't be stored

    """
    meter = get_meter(db, meter_id)

    ordered = sorted(
        (
            _Usage(r.reading, _wall_clock(r.start_timestamp), _wall_clock(r.end_timestamp))
            for r in readings
        ),
        key=lambda u: u.start,
    )

    resets = 0
    if meter.cumulative:
        usage, resets = _cumulative_usage(meter, ordered)
    else:
        usage = ordered

    accepted: list[Reading] = []
    dropped = 0
    for item in usage:
        if not meter.disable_checks:
            if _out_of_bounds(meter, item):
                dropped += 1
                logger.warning(
                    "Dropping reading %s at %s for meter %s: outside bounds",
                    item.value,
                    item.start,
                    meter.name,
                )
                if dropped > meter.max_errors:
                    raise ValidationError(
                        f"More than {meter.max_errors} readings for meter '{meter.name}' "
                        "were out of bounds; no readings were stored"
                    )
                continue
            if accepted:
                gap = (item.start - accepted[-1].end_timestamp).total_seconds()
                if gap > meter.reading_gap:
                    logger.warning(
                        "Gap of %ss before reading at %s for meter %s",
                        gap,
                        item.start,
                        meter.name,
                    )
        accepted.append(
            Reading(
                meter_id=meter.id,
                reading=item.value,
                start_timestamp=item.start,
                end_timestamp=item.end,
            )
        )

    db.add_all(accepted)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to store readings for meter %s: %s", meter.name, e)
        raise PersistenceError(f"Failed to store readings: {e}") from e

    return IngestResult(
        meter_id=meter.id,
        inserted=len(accepted),
        dropped=dropped,
        resets=resets,
    )


def get_readings_history(
    db: Session,
    meter_id: int,
    limit: int = 100,
    offset: int = 0,
) -> tuple[list[Reading], int]:
    """Get reading history for a specific meter with pagination."""
    query = db.query(Reading).filter(Reading.meter_id == meter_id)
    total = query.count()
    readings = query.order_by(Reading.start_timestamp.desc()).offset(offset).limit(limit).all()
    return readings, total
