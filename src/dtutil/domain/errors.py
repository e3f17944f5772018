"""The single error kind raised by the domain layer, plus argument guards."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any


class InvalidArgumentError(ValueError):
    """Raised for an absent argument, unparsable text, or an unrecognized pattern."""


def require_present(value: Any, name: str) -> None:
    """Raise if *value* is None."""
    if value is None:
        raise InvalidArgumentError(f"{name} argument cannot be None")


def require_naive_datetime(value: Any, name: str) -> None:
    """Raise unless *value* is a ``datetime`` without a time zone."""
    require_present(value, name)
    if not isinstance(value, datetime):
        raise InvalidArgumentError(f"{name} must be a datetime, got {type(value).__name__}")
    if value.tzinfo is not None:
        raise InvalidArgumentError(f"{name} must not carry a time zone")


def require_date(value: Any, name: str) -> None:
    """Raise unless *value* is a ``date`` (a ``datetime`` is accepted for its date part)."""
    require_present(value, name)
    if not isinstance(value, date):
        raise InvalidArgumentError(f"{name} must be a date, got {type(value).__name__}")


def require_naive_time(value: Any, name: str) -> None:
    """Raise unless *value* is a ``time`` without a time zone."""
    require_present(value, name)
    if not isinstance(value, time):
        raise InvalidArgumentError(f"{name} must be a time, got {type(value).__name__}")
    if value.tzinfo is not None:
        raise InvalidArgumentError(f"{name} must not carry a time zone")
