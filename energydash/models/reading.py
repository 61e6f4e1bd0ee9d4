"""Reading database model - usage per interval."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from energydash.core.database import Base

if TYPE_CHECKING:
    from energydash.models.meter import Meter


class Reading(Base):
    """Usage recorded by a meter over [start_timestamp, end_timestamp]."""

    __tablename__ = "readings"

    meter_id: Mapped[int] = mapped_column(ForeignKey("meters.id"), primary_key=True)
    start_timestamp: Mapped[datetime] = mapped_column(primary_key=True)
    end_timestamp: Mapped[datetime] = mapped_column(index=True)
    reading: Mapped[float]

    # Relationships
    meter: Mapped["Meter"] = relationship(back_populates="readings")
