"""Database models."""

from energydash.models.cik import Cik
from energydash.models.meter import Meter
from energydash.models.preferences import Preferences
from energydash.models.reading import Reading

__all__ = ["Cik", "Meter", "Preferences", "Reading"]
