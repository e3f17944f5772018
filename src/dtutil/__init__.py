"""dtutil — date/time formatting, parsing, and difference utilities."""

from __future__ import annotations

from dtutil.domain.errors import InvalidArgumentError
from dtutil.domain.patterns import DateTimeFormatter
from dtutil.domain.types import FormatStyle, TimeUnit
from dtutil.domain.utilities import (
    DEFAULT_LOCALE,
    DEFAULT_PATTERN,
    compose,
    decompose,
    diff,
    format_datetime,
    format_style,
    parse_datetime,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_LOCALE",
    "DEFAULT_PATTERN",
    "DateTimeFormatter",
    "FormatStyle",
    "InvalidArgumentError",
    "TimeUnit",
    "compose",
    "decompose",
    "diff",
    "format_datetime",
    "format_style",
    "parse_datetime",
]
