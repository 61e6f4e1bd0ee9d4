"""Admin preferences form routes."""

import logging
from zoneinfo import available_timezones

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from energydash.core.config import settings
from energydash.core.database import get_db
from energydash.core.exceptions import PersistenceError
from energydash.models.enums import AreaUnitType, ChartType, LanguageType
from energydash.schemas.preferences import PreferencesUpdate
from energydash.services.preferences import (
    get_preferences,
    preferences_changed,
    update_preferences,
)
from energydash.web.flash import flash, pop_flash_messages
from energydash.web.template_config import templates

logger = logging.getLogger(__name__)

router = APIRouter()

# Unchecked checkboxes are absent from the submitted form
CHECKBOX_FIELDS = ("default_bar_stacking", "default_area_normalization")
TEXT_FIELDS = (
    "display_title",
    "default_chart_to_render",
    "default_area_unit",
    "default_language",
    "default_timezone",
    "default_warning_file_size",
    "default_file_size_limit",
    "default_help_url",
    "default_meter_reading_frequency",
    "default_meter_minimum_value",
    "default_meter_maximum_value",
    "default_meter_minimum_date",
    "default_meter_maximum_date",
    "default_meter_reading_gap",
    "default_meter_maximum_errors",
    "default_meter_disable_checks",
)


@router.get("/preferences", response_class=HTMLResponse)
async def preferences_page(
    request: Request,
    db: Session = Depends(get_db),
) -> HTMLResponse:
    """Display the site preferences form."""
    return templates.TemplateResponse(
        request,
        "admin/preferences.html",
        {
            "prefs": get_preferences(db),
            "messages": pop_flash_messages(request),
            "chart_types": list(ChartType),
            "area_units": list(AreaUnitType),
            "languages": list(LanguageType),
            "timezones": sorted(available_timezones()),
            "min_val": settings.MIN_VAL,
            "max_val": settings.MAX_VAL,
            "max_errors": settings.MAX_ERRORS,
        },
    )


@router.post("/preferences", response_model=None)
async def submit_preferences(
    request: Request,
    db: Session = Depends(get_db),
) -> RedirectResponse:
    """Process the site preferences form."""
    form_data = await request.form()
    values: dict[str, object] = {name: form_data.get(name) for name in TEXT_FIELDS}
    values.update({name: name in form_data for name in CHECKBOX_FIELDS})

    try:
        submitted = PreferencesUpdate.model_validate(values)
    except PydanticValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        if fields:
            reason = f"invalid {', '.join(fields)}"
        else:
            reason = e.errors()[0]["msg"].removeprefix("Value error, ")
        flash(request, f"Failed to submit changes: {reason}", "error")
        return RedirectResponse("/admin/preferences", status_code=303)

    if not preferences_changed(get_preferences(db), submitted):
        flash(request, "No changes to submit.", "info")
        return RedirectResponse("/admin/preferences", status_code=303)

    try:
        update_preferences(db, submitted)
        flash(request, "Preferences updated.", "success")
    except PersistenceError as e:
        logger.error("Preferences form submit failed: %s", e)
        flash(request, "Failed to submit changes.", "error")

    return RedirectResponse("/admin/preferences", status_code=303)
