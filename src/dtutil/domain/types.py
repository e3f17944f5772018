"""Formatting styles and difference units.

Both enums are StrEnums so their values round-trip through CLI flags,
TOML config, and JSON output unchanged.
"""

from __future__ import annotations

from enum import StrEnum


class FormatStyle(StrEnum):
    """Locale-aware presets for combined date+time formatting."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    FULL = "full"


class TimeUnit(StrEnum):
    """Granularity of a difference between two datetimes."""

    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"
