"""Enum definitions for site preferences."""

from enum import Enum


class ChartType(str, Enum):
    """Graph types a user can land on by default."""

    LINE = "line"
    BAR = "bar"
    COMPARE = "compare"
    MAP = "map"
    RADAR = "radar"
    THREE_D = "3D"
    COMPARE_LINE = "compare_line"


class AreaUnitType(str, Enum):
    """Unit used when normalizing usage by area."""

    FEET = "feet"
    METERS = "meters"
    NONE = "none"


class LanguageType(str, Enum):
    """Supported interface languages."""

    EN = "en"
    FR = "fr"
    ES = "es"
