"""Preferences database model - site-wide admin settings."""

from datetime import UTC, datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from energydash.core.config import settings
from energydash.core.database import Base
from energydash.models.enums import AreaUnitType, ChartType, LanguageType

# The table only ever holds this row
PREFERENCES_ID = 1


class Preferences(Base):
    """Site preferences, also the defaults for newly created meters."""

    __tablename__ = "preferences"

    id: Mapped[int] = mapped_column(primary_key=True, default=PREFERENCES_ID)

    # Graph settings
    display_title: Mapped[str] = mapped_column(String(50), default="")
    default_chart_to_render: Mapped[ChartType] = mapped_column(
        String(20), default=ChartType.LINE
    )
    default_bar_stacking: Mapped[bool] = mapped_column(default=False)
    default_area_normalization: Mapped[bool] = mapped_column(default=False)
    default_area_unit: Mapped[AreaUnitType] = mapped_column(
        String(10), default=AreaUnitType.METERS
    )

    # Site settings
    default_language: Mapped[LanguageType] = mapped_column(String(5), default=LanguageType.EN)
    default_timezone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    default_warning_file_size: Mapped[float] = mapped_column(default=5)  # MB
    default_file_size_limit: Mapped[float] = mapped_column(default=25)  # MB
    default_help_url: Mapped[str] = mapped_column(String(255), default="")

    # Meter defaults
    default_meter_reading_frequency: Mapped[str] = mapped_column(String(50), default="00:15:00")
    default_meter_minimum_value: Mapped[float] = mapped_column(default=settings.MIN_VAL)
    default_meter_maximum_value: Mapped[float] = mapped_column(default=settings.MAX_VAL)
    default_meter_minimum_date: Mapped[datetime] = mapped_column(default=settings.MIN_DATE)
    default_meter_maximum_date: Mapped[datetime] = mapped_column(default=settings.MAX_DATE)
    default_meter_reading_gap: Mapped[float] = mapped_column(default=0)  # seconds
    default_meter_maximum_errors: Mapped[int] = mapped_column(default=settings.MAX_ERRORS)
    default_meter_disable_checks: Mapped[bool] = mapped_column(default=False)

    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )
