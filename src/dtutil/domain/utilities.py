"""Date/time utility operations.

Stateless functions over naive ``datetime`` values:
- format_datetime / format_style: render text (pattern or locale style).
- parse_datetime: strict text-to-datetime conversion.
- diff: signed whole-unit difference between two datetimes.
- compose / decompose: join a date and a time, or take the date back out.

INVARIANT: ``DEFAULT_PATTERN`` is a wire format. Text produced by
``format_datetime(value)`` must stay byte-identical across releases.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta

from babel import Locale

from dtutil.domain.errors import (
    InvalidArgumentError,
    require_date,
    require_naive_datetime,
    require_naive_time,
    require_present,
)
from dtutil.domain.patterns import DEFAULT_LOCALE, DateTimeFormatter
from dtutil.domain.types import FormatStyle, TimeUnit

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "yyyy-MM-dd HH:mm:ss"

__all__ = [
    "DEFAULT_LOCALE",
    "DEFAULT_PATTERN",
    "compose",
    "decompose",
    "diff",
    "format_datetime",
    "format_style",
    "parse_datetime",
]

_UNITS_BY_NAME: dict[str, TimeUnit] = {unit.value: unit for unit in TimeUnit}

_MICROS_PER_UNIT: dict[TimeUnit, int] = {
    TimeUnit.DAYS: 86_400_000_000,
    TimeUnit.HOURS: 3_600_000_000,
    TimeUnit.MINUTES: 60_000_000,
}


def _as_formatter(
    pattern: str | DateTimeFormatter,
    locale: str | Locale | None,
    name: str,
) -> DateTimeFormatter:
    require_present(pattern, name)
    if isinstance(pattern, DateTimeFormatter):
        return pattern if locale is None else pattern.with_locale(locale)
    if isinstance(pattern, str):
        return DateTimeFormatter.of_pattern(pattern, locale)
    msg = f"{name} must be a pattern string or DateTimeFormatter, got {type(pattern).__name__}"
    raise InvalidArgumentError(msg)


def format_datetime(
    value: datetime,
    pattern: str | DateTimeFormatter = DEFAULT_PATTERN,
    *,
    locale: str | Locale | None = None,
) -> str:
    """Format *value* with *pattern* (default ``yyyy-MM-dd HH:mm:ss``).

    Args:
        value: A naive datetime.
        pattern: Pattern text or a compiled formatter.
        locale: Locale for text fields such as month names.

    Raises:
        InvalidArgumentError: If *value* is absent or the pattern is not
            recognized.

    Examples:
        >>> format_datetime(datetime(2023, 6, 15, 14, 30))
        '2023-06-15 14:30:00'
        >>> format_datetime(datetime(1999, 12, 31, 23, 59), "yyyy")
        '1999'
    """
    require_naive_datetime(value, "value")
    return _as_formatter(pattern, locale, "pattern").format(value)


def format_style(
    value: datetime,
    style: FormatStyle | str,
    *,
    locale: str | Locale | None = None,
) -> str:
    """Format *value* with a locale-aware date+time *style* (default locale ``en_US``)."""
    require_naive_datetime(value, "value")
    require_present(style, "style")
    return DateTimeFormatter.of_style(style, locale).format(value)


def parse_datetime(
    text: str,
    pattern: str | DateTimeFormatter = DEFAULT_PATTERN,
    *,
    locale: str | Locale | None = None,
) -> datetime:
    """Parse *text* with *pattern* (default ``yyyy-MM-dd HH:mm:ss``).

    Raises:
        InvalidArgumentError: Carrying the parser's message when *text* is
            absent, malformed, or names an impossible date or time.
    """
    formatter = _as_formatter(pattern, locale, "formatter")
    return formatter.parse(text)


def _truncate(amount: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(amount) // divisor
    return -quotient if amount < 0 else quotient


def _coerce_unit(unit: TimeUnit | str) -> TimeUnit:
    if isinstance(unit, TimeUnit):
        return unit
    resolved = _UNITS_BY_NAME.get(unit.strip().lower()) if isinstance(unit, str) else None
    if resolved is None:
        logger.debug("Unrecognized unit %r, falling back to hours", unit)
        return TimeUnit.HOURS
    return resolved


def diff(start: datetime, end: datetime, unit: TimeUnit | str) -> int:
    """Return ``end - start`` as a whole count of *unit*, truncated toward zero.

    Seconds are computed from whole milliseconds. Any unit outside
    :class:`TimeUnit` counts hours. The result is negative when *end*
    precedes *start*.

    Examples:
        >>> diff(datetime(2023, 1, 1), datetime(2023, 1, 2), TimeUnit.HOURS)
        24
        >>> diff(datetime(2023, 1, 2), datetime(2023, 1, 1), "days")
        -1
    """
    require_naive_datetime(start, "start")
    require_naive_datetime(end, "end")
    require_present(unit, "unit")

    micros = (end - start) // timedelta(microseconds=1)
    resolved = _coerce_unit(unit)
    if resolved is TimeUnit.SECONDS:
        return _truncate(_truncate(micros, 1000), 1000)
    return _truncate(micros, _MICROS_PER_UNIT[resolved])


def compose(day: date, clock: time) -> datetime:
    """Combine a date and a time-of-day into one datetime."""
    require_date(day, "date")
    require_naive_time(clock, "time")
    return datetime.combine(day, clock)


def decompose(value: datetime) -> date:
    """Return the calendar date of *value*, dropping the time of day."""
    require_naive_datetime(value, "value")
    return value.date()
