"""Cik database model - the unit conversion coefficient table."""

from sqlalchemy import Float
from sqlalchemy.orm import Mapped, mapped_column

from energydash.core.database import Base


class Cik(Base):
    """Linear conversion from a non-meter unit to a meter unit.

    A row exists only for unit pairs that have a direct conversion:

        meter_value = slope * non_meter_value + intercept
    """

    __tablename__ = "cik"

    meter_unit_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    non_meter_unit_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    slope: Mapped[float] = mapped_column(Float)
    intercept: Mapped[float] = mapped_column(Float)

    def __repr__(self) -> str:
        return (
            f"<Cik {self.meter_unit_id}<-{self.non_meter_unit_id} "
            f"slope={self.slope} intercept={self.intercept}>"
        )
