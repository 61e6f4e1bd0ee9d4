"""Site preferences routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from energydash.core.database import get_db
from energydash.schemas.preferences import PreferencesResponse, PreferencesUpdate
from energydash.services import preferences as preferences_service

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("", response_model=PreferencesResponse)
def get_preferences(db: Session = Depends(get_db)):
    """Get the site preferences."""
    return preferences_service.get_preferences(db)


@router.put("", response_model=PreferencesResponse)
def submit_preferences(
    data: PreferencesUpdate,
    db: Session = Depends(get_db),
):
    """Replace the site preferences; every field is validated against its bounds."""
    return preferences_service.update_preferences(db, data)
