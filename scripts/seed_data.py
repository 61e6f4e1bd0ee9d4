"""Seed script to populate the database with sample data."""

import math
from datetime import datetime, timedelta

from energydash.core.database import SessionLocal, init_db
from energydash.models.meter import Meter
from energydash.schemas.meter import MeterCreate
from energydash.schemas.reading import ReadingCreate
from energydash.services.cik import replace_all
from energydash.services.meter import create_meter
from energydash.services.preferences import get_preferences
from energydash.services.readings import ingest_readings

NAN = math.nan

# Units: rows are meter units (kWh, BTU), columns non-meter units (kWh, MJ, BTU)
SAMPLE_CIK = [
    [(1.0, 0.0, ""), (0.277778, 0.0, ""), (NAN, NAN, "")],
    [(NAN, NAN, ""), (NAN, NAN, ""), (1.0, 0.0, "")],
]


def seed_database() -> None:
    """Seed the database with sample data."""
    init_db()
    db = SessionLocal()
    try:
        if db.query(Meter).first():
            print("Database already has data. Skipping seed.")
            return

        print("Seeding database...")

        prefs = get_preferences(db)
        print(f"Preferences ready (default chart: {prefs.default_chart_to_render})")

        inserted = replace_all(db, SAMPLE_CIK)
        print(f"Stored {inserted} conversion coefficients")

        meter = create_meter(
            db,
            MeterCreate(
                name="Main Building",
                unit_id=0,
                cumulative=True,
                cumulative_reset=True,
                cumulative_reset_start="23:45:00",
                cumulative_reset_end="23:59:59.999999",
            ),
        )
        print(f"Created meter: {meter.name} (ID: {meter.id})")

        # Cumulative counter that rolls over inside the reset window
        samples = [
            (datetime(2024, 1, 1, 20, 0), 1000),
            (datetime(2024, 1, 1, 21, 0), 1040),
            (datetime(2024, 1, 1, 22, 0), 1085),
            (datetime(2024, 1, 1, 23, 0), 1120),
            (datetime(2024, 1, 1, 23, 50), 15),
            (datetime(2024, 1, 2, 0, 50), 60),
        ]
        readings = [
            ReadingCreate(
                reading=value,
                start_timestamp=begin,
                end_timestamp=begin + timedelta(minutes=50),
            )
            for begin, value in samples
        ]
        result = ingest_readings(db, meter.id, readings)
        print(f"Ingested {result.inserted} readings ({result.resets} reset)")

        print("Database seeded successfully!")
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
