"""Meter database model."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from energydash.core.database import Base

if TYPE_CHECKING:
    from energydash.models.reading import Reading


class Meter(Base):
    """Meter entity with its ingestion rules."""

    __tablename__ = "meters"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    unit_id: Mapped[int | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    # Cumulative readings only ever grow, except inside the daily reset window
    cumulative: Mapped[bool] = mapped_column(default=False)
    cumulative_reset: Mapped[bool] = mapped_column(default=False)
    cumulative_reset_start: Mapped[str] = mapped_column(String(15))  # HH:MM:SS
    cumulative_reset_end: Mapped[str] = mapped_column(String(15))  # HH:MM:SS

    # Validation bounds, defaulted from site preferences
    reading_frequency: Mapped[str] = mapped_column(String(50))
    min_value: Mapped[float]
    max_value: Mapped[float]
    min_date: Mapped[datetime]
    max_date: Mapped[datetime]
    reading_gap: Mapped[float]  # seconds
    max_errors: Mapped[int]
    disable_checks: Mapped[bool] = mapped_column(default=False)

    # Relationships
    readings: Mapped[list["Reading"]] = relationship(
        back_populates="meter", cascade="all, delete-orphan"
    )

