"""Cik Pydantic schemas for request/response validation."""

from typing import Any

from pydantic import BaseModel

# (slope, intercept, unused); a null or NaN slope means no conversion
CikCell = tuple[float | None, float | None, Any]


class CikResponse(BaseModel):
    """Schema for one stored conversion coefficient."""

    meter_unit_id: int
    non_meter_unit_id: int
    slope: float
    intercept: float

    model_config = {"from_attributes": True}


class CikReplace(BaseModel):
    """Schema for replacing the whole conversion table.

    Rows of ``matrix`` are meter units and columns are non-meter units. When
    the id lists are given they name the unit for each row/column position;
    otherwise the position is the unit id.
    """

    matrix: list[list[CikCell]]
    meter_unit_ids: list[int] | None = None
    non_meter_unit_ids: list[int] | None = None


class CikReplaceResult(BaseModel):
    """Schema for the outcome of a table replace."""

    inserted: int
