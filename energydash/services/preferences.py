"""Preferences service for the site-wide admin settings."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from energydash.core.exceptions import PersistenceError
from energydash.models.preferences import PREFERENCES_ID, Preferences
from energydash.schemas.preferences import PreferencesResponse, PreferencesUpdate

logger = logging.getLogger(__name__)


def get_preferences(db: Session) -> Preferences:
    """Get the preferences row, creating it from defaults on first use."""
    try:
        prefs = db.get(Preferences, PREFERENCES_ID)
        if prefs is None:
            prefs = Preferences(id=PREFERENCES_ID)
            db.add(prefs)
            db.commit()
            db.refresh(prefs)
            logger.info("Created default site preferences")
        return prefs
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(f"Failed to load preferences: {e}") from e


def preferences_changed(current: Preferences, submitted: PreferencesUpdate) -> bool:
    """Check whether a submission differs from the stored preferences."""
    stored = PreferencesResponse.model_validate(current).model_dump(exclude={"updated_at"})
    return stored != submitted.model_dump()


def update_preferences(db: Session, data: PreferencesUpdate) -> Preferences:
    """
    Replace the stored preferences with a validated submission.

    Args:
        db: Database session
        data: Full set of preference values

    Returns:
        Updated preferences

    Raises:
        PersistenceError: If the update can't be written

    """
    prefs = get_preferences(db)
    for field, value in data.model_dump().items():
        setattr(prefs, field, value)

    try:
        db.commit()
        db.refresh(prefs)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Failed to update preferences: %s", e)
        raise PersistenceError(f"Failed to update preferences: {e}") from e

    logger.info("Site preferences updated")
    return prefs
