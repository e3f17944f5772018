"""ConversionService — text-in, text-out wrappers over the domain operations.

Values arrive as text in the configured input pattern
(``[format] pattern``, default ``yyyy-MM-dd HH:mm:ss``) so any surface
that only speaks strings can drive the utilities.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, time
from typing import TypeVar

from dtutil.domain.errors import InvalidArgumentError
from dtutil.domain.patterns import DateTimeFormatter
from dtutil.domain.types import FormatStyle, TimeUnit
from dtutil.domain.utilities import (
    compose,
    decompose,
    diff,
    format_datetime,
    format_style,
    parse_datetime,
)
from dtutil.services.base import BaseService
from dtutil.services.result import ServiceResult

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class ConversionService(BaseService):
    """Format, parse, diff, compose, and decompose values given as text."""

    @property
    def _locale(self) -> str:
        return self._settings.format.locale

    def _input_formatter(self) -> DateTimeFormatter:
        return DateTimeFormatter.of_pattern(self._settings.format.pattern, self._locale)

    def format(
        self,
        value_text: str,
        *,
        pattern: str | None = None,
        style: FormatStyle | str | None = None,
    ) -> ServiceResult:
        """Render a value with a pattern, a style, or the default pattern."""
        op = "format"
        if pattern is not None and style is not None:
            exc = InvalidArgumentError("pattern and style cannot be combined")
            return self._invalid(op, exc, pattern=pattern, style=str(style))
        try:
            value = parse_datetime(value_text, self._input_formatter())
            if style is not None:
                text = format_style(value, style, locale=self._locale)
                data = {"text": text, "style": str(style), "locale": self._locale}
            else:
                used = pattern if pattern is not None else self._settings.format.pattern
                text = format_datetime(value, used, locale=self._locale)
                data = {"text": text, "pattern": used}
        except InvalidArgumentError as exc:
            return self._invalid(op, exc, value=value_text)
        logger.debug("Formatted %s", value_text)
        return ServiceResult(ok=True, op=op, data=data)

    def parse(self, text: str, *, pattern: str | None = None) -> ServiceResult:
        """Parse text and echo it back in the input pattern and ISO 8601."""
        op = "parse"
        try:
            used = pattern if pattern is not None else self._settings.format.pattern
            value = parse_datetime(text, used, locale=self._locale)
            canonical = self._input_formatter().format(value)
        except InvalidArgumentError as exc:
            return self._invalid(op, exc, text=text)
        return ServiceResult(
            ok=True,
            op=op,
            data={"value": canonical, "iso": value.isoformat()},
        )

    def diff(
        self,
        start_text: str,
        end_text: str,
        *,
        unit: TimeUnit | str | None = None,
    ) -> ServiceResult:
        """Whole-unit difference ``end - start`` (unit default from ``[diff] unit``)."""
        op = "diff"
        requested = unit if unit is not None else self._settings.diff.unit
        warnings: list[str] = []
        if str(requested).strip().lower() not in {u.value for u in TimeUnit}:
            warnings.append(f"Unrecognized unit {str(requested)!r}; counted hours")
        try:
            formatter = self._input_formatter()
            start = parse_datetime(start_text, formatter)
            end = parse_datetime(end_text, formatter)
            value = diff(start, end, requested)
        except InvalidArgumentError as exc:
            return self._invalid(op, exc, start=start_text, end=end_text)
        return ServiceResult(
            ok=True,
            op=op,
            data={"value": value, "unit": str(requested)},
            warnings=warnings,
        )

    def compose(self, date_text: str, time_text: str) -> ServiceResult:
        """Join an ISO date (``yyyy-MM-dd``) and time (``HH:mm:ss``) into one value."""
        op = "compose"
        try:
            day = _parse_iso(date.fromisoformat, date_text, "date")
            clock = _parse_iso(time.fromisoformat, time_text, "time")
            value = compose(day, clock)
            canonical = self._input_formatter().format(value)
        except InvalidArgumentError as exc:
            return self._invalid(op, exc, date=date_text, time=time_text)
        return ServiceResult(ok=True, op=op, data={"value": canonical})

    def decompose(self, value_text: str) -> ServiceResult:
        """Return the calendar date of a value as ``yyyy-MM-dd``."""
        op = "decompose"
        try:
            value = parse_datetime(value_text, self._input_formatter())
            day = decompose(value)
        except InvalidArgumentError as exc:
            return self._invalid(op, exc, value=value_text)
        return ServiceResult(ok=True, op=op, data={"date": day.isoformat()})


def _parse_iso(parser: Callable[[str], _T], text: str, name: str) -> _T:
    try:
        return parser(text)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid {name} {text!r}: {exc}") from exc
