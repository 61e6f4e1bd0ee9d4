"""Conversion table routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from energydash.core.database import get_db
from energydash.schemas.cik import CikReplace, CikReplaceResult, CikResponse
from energydash.services import cik as cik_service

router = APIRouter(prefix="/conversions", tags=["conversions"])


@router.get("/cik", response_model=list[CikResponse])
def get_cik(db: Session = Depends(get_db)):
    """List every stored conversion coefficient."""
    return cik_service.get_all(db)


@router.put("/cik", response_model=CikReplaceResult)
def replace_cik(
    data: CikReplace,
    db: Session = Depends(get_db),
) -> CikReplaceResult:
    """
    Replace the conversion table from a conversion matrix.

    Cells whose slope is null or NaN have no conversion and are not stored.
    """
    inserted = cik_service.replace_all(
        db,
        data.matrix,
        meter_unit_ids=data.meter_unit_ids,
        non_meter_unit_ids=data.non_meter_unit_ids,
    )
    return CikReplaceResult(inserted=inserted)
