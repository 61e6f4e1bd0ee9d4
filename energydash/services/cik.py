"""Cik service - persistence of the unit conversion table."""

import logging
import math
import threading
from collections.abc import Sequence
from numbers import Real

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from energydash.core.exceptions import PersistenceError, ValidationError
from energydash.models.cik import Cik

logger = logging.getLogger(__name__)

# Held for the whole delete/insert/commit so concurrent replaces don't interleave
_replace_lock = threading.Lock()


def get_all(db: Session) -> list[Cik]:
    """Return every stored conversion coefficient in storage order."""
    try:
        return list(db.scalars(select(Cik)).all())
    except SQLAlchemyError as e:
        raise PersistenceError(f"Failed to read conversion table: {e}") from e


def _is_defined(value: object) -> bool:
    """Check whether a matrix slope holds an actual conversion."""
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not math.isnan(value)


def _resolve_ids(ids: Sequence[int] | None, size: int, axis: str) -> Sequence[int]:
    if ids is None:
        return range(size)
    if len(ids) != size:
        raise ValidationError(f"Expected {size} {axis} unit ids, got {len(ids)}")
    return ids


def _coefficient_rows(
    matrix: Sequence[Sequence[Sequence]],
    meter_unit_ids: Sequence[int] | None,
    non_meter_unit_ids: Sequence[int] | None,
) -> list[dict]:
    """Flatten the matrix row-major into insert parameters, skipping undefined cells.

    A cell with a slope must also carry an intercept; that is checked here so
    a bad matrix is refused before the stored table is touched.
    """
    row_ids = _resolve_ids(meter_unit_ids, len(matrix), "meter")
    width = max((len(cells) for cells in matrix), default=0)
    column_ids = _resolve_ids(non_meter_unit_ids, width, "non-meter")

    rows = []
    for row, cells in enumerate(matrix):
        for column, cell in enumerate(cells):
            if not _is_defined(cell[0]):
                continue
            if not _is_defined(cell[1]):
                raise ValidationError(
                    f"Cell ({row}, {column}) has a slope but no intercept"
                )
            rows.append(
                {
                    "meter_unit_id": row_ids[row],
                    "non_meter_unit_id": column_ids[column],
                    "slope": cell[0],
                    "intercept": cell[1],
                }
            )
    return rows


def replace_all(
    db: Session,
    matrix: Sequence[Sequence[Sequence]],
    meter_unit_ids: Sequence[int] | None = None,
    non_meter_unit_ids: Sequence[int] | None = None,
) -> int:
    """
    Replace the conversion table with the defined cells of ``matrix``.

    All existing rows are removed, then one row is inserted per cell whose
    slope is a real number. Both steps run in a single transaction on ``db``
    so a failure leaves the previous table in place.

    Args:
        db: Database session, owned by the caller
        matrix: Cells of (slope, intercept, unused) indexed [meter row][non-meter column]
        meter_unit_ids: Unit id for each row, defaults to the row index
        non_meter_unit_ids: Unit id for each column, defaults to the column index

    Returns:
        Number of rows inserted

    Raises:
        ValidationError: If an id list does not match the matrix shape, or a
            cell has a slope without an intercept
        PersistenceError: If the delete, an insert or the commit fails

    """
    rows = _coefficient_rows(matrix, meter_unit_ids, non_meter_unit_ids)

    with _replace_lock:
        try:
            db.execute(delete(Cik))
            if rows:
                db.execute(insert(Cik), rows)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Conversion table replace failed, rolled back: %s", e)
            raise PersistenceError(f"Failed to replace conversion table: {e}") from e

    logger.info("Conversion table replaced with %d coefficients", len(rows))
    return len(rows)
