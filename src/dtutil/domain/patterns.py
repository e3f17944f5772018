"""Letter-pattern compilation, formatting, and strict parsing.

A pattern such as ``yyyy-MM-dd HH:mm:ss`` is compiled once into an
immutable :class:`DateTimeFormatter` that can both render and parse
naive datetimes.

Pattern syntax:
- Runs of an ASCII letter are fields (``yyyy``, ``MM``, ``E``).
- ``'text'`` is literal text; ``''`` is a single quote.
- ``[`` and ``]`` delimit an optional section.
- ``#``, ``{`` and ``}`` are reserved.
- Any other character is literal.

Numeric fields are rendered and parsed with ASCII digits only. Text
fields (era, month and day names, AM/PM, flexible day periods) come from
Babel's CLDR data for the formatter's locale.

INVARIANT: A DateTimeFormatter never changes after construction, so one
instance may be shared freely between threads.
"""

from __future__ import annotations

import calendar
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta
from functools import cached_property

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime as babel_format_datetime
from babel.dates import (
    get_date_format,
    get_datetime_format,
    get_day_names,
    get_era_names,
    get_month_names,
    get_period_names,
    get_time_format,
)

from dtutil.domain.errors import InvalidArgumentError, require_naive_datetime
from dtutil.domain.types import FormatStyle

DEFAULT_LOCALE = "en_US"

# Allowed (min, max) letter counts per pattern letter.
PATTERN_LETTERS: dict[str, tuple[int, int]] = {
    "G": (1, 5),
    "u": (1, 19),
    "y": (1, 19),
    "Y": (1, 19),
    "Q": (1, 5),
    "q": (1, 5),
    "M": (1, 5),
    "L": (1, 5),
    "w": (1, 2),
    "W": (1, 1),
    "d": (1, 2),
    "D": (1, 3),
    "F": (1, 1),
    "E": (1, 5),
    "e": (1, 5),
    "c": (1, 5),
    "a": (1, 1),
    "B": (1, 5),
    "h": (1, 2),
    "K": (1, 2),
    "k": (1, 2),
    "H": (1, 2),
    "m": (1, 2),
    "s": (1, 2),
    "S": (1, 9),
    "A": (1, 19),
    "n": (1, 19),
    "N": (1, 19),
}

ZONE_LETTERS = frozenset("VzOXxZ")
RESERVED_CHARS = frozenset("#{}")
PARSEABLE_LETTERS = frozenset("GuyMLdDEahKkHmsSn")

FIELD = "field"
LITERAL = "literal"
OPTIONAL_START = "optional_start"
OPTIONAL_END = "optional_end"

_NAME_WIDTHS: dict[int, str] = {
    1: "abbreviated",
    2: "abbreviated",
    3: "abbreviated",
    4: "wide",
    5: "narrow",
}

_NANOS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True)
class Token:
    """One element of a compiled pattern."""

    kind: str
    value: str
    count: int = 1


# --- Locale resolution ---


def resolve_locale(locale: str | Locale | None) -> Locale:
    """Return a Babel :class:`Locale` for *locale* (default: ``en_US``).

    Raises:
        InvalidArgumentError: If the identifier is not a known locale.
    """
    if isinstance(locale, Locale):
        return locale
    identifier = locale or DEFAULT_LOCALE
    try:
        return Locale.parse(identifier)
    except (UnknownLocaleError, ValueError, TypeError) as exc:
        raise InvalidArgumentError(f"Unknown locale: {identifier!r}") from exc


# --- Tokenizing ---


def _check_letter(letter: str, count: int) -> None:
    if letter in ZONE_LETTERS:
        msg = f"Pattern letter {letter!r} needs a time zone, which a naive value does not carry"
        raise InvalidArgumentError(msg)
    bounds = PATTERN_LETTERS.get(letter)
    if bounds is None:
        raise InvalidArgumentError(f"Unknown pattern letter: {letter}")
    low, high = bounds
    if count > high:
        raise InvalidArgumentError(f"Too many pattern letters: {letter}")
    if count < low or (letter == "c" and count == 2):
        raise InvalidArgumentError(f"Invalid pattern {letter * count!r}")


def tokenize_pattern(pattern: str) -> tuple[Token, ...]:
    """Split *pattern* into field, literal, and optional-section tokens.

    Adjacent literal characters are merged. Unclosed optional sections
    are closed at the end of the pattern.

    Raises:
        InvalidArgumentError: On an unknown letter, a bad letter count, an
            unterminated quote, a stray ``]``, or a reserved character.

    Examples:
        >>> [t.value for t in tokenize_pattern("yyyy-MM")]
        ['y', '-', 'M']
    """
    tokens: list[Token] = []
    depth = 0
    pos = 0
    length = len(pattern)

    def add_literal(text: str) -> None:
        if tokens and tokens[-1].kind == LITERAL:
            tokens[-1] = Token(LITERAL, tokens[-1].value + text)
        else:
            tokens.append(Token(LITERAL, text))

    while pos < length:
        char = pattern[pos]
        if char.isascii() and char.isalpha():
            end = pos
            while end < length and pattern[end] == char:
                end += 1
            _check_letter(char, end - pos)
            tokens.append(Token(FIELD, char, end - pos))
            pos = end
        elif char == "'":
            end = pos + 1
            while end < length:
                if pattern[end] == "'":
                    if end + 1 < length and pattern[end + 1] == "'":
                        end += 2
                        continue
                    break
                end += 1
            if end >= length:
                raise InvalidArgumentError(
                    f"Pattern ends with an incomplete string literal: {pattern}"
                )
            quoted = pattern[pos + 1 : end]
            add_literal(quoted.replace("''", "'") if quoted else "'")
            pos = end + 1
        elif char == "[":
            depth += 1
            tokens.append(Token(OPTIONAL_START, char))
            pos += 1
        elif char == "]":
            if depth == 0:
                raise InvalidArgumentError(
                    "Pattern invalid as it contains ] without previous ["
                )
            depth -= 1
            tokens.append(Token(OPTIONAL_END, char))
            pos += 1
        elif char in RESERVED_CHARS:
            raise InvalidArgumentError(f"Pattern includes reserved character: {char!r}")
        else:
            add_literal(char)
            pos += 1

    tokens.extend(Token(OPTIONAL_END, "]") for _ in range(depth))
    return tuple(tokens)


def style_pattern(style: FormatStyle, locale: Locale) -> str:
    """Return the combined date+time pattern for *style* in *locale*.

    The time half of ``long`` and ``full`` uses the ``medium`` time
    pattern: the longer time patterns include a zone name.
    """
    time_style = FormatStyle.MEDIUM if style in (FormatStyle.LONG, FormatStyle.FULL) else style
    date_part = str(get_date_format(str(style), locale=locale))
    time_part = str(get_time_format(str(time_style), locale=locale))
    combined = str(get_datetime_format(str(style), locale=locale))
    return combined.replace("{1}", date_part).replace("{0}", time_part)


# --- Rendering ---


def _nano_of_day(value: datetime) -> int:
    seconds = value.hour * 3600 + value.minute * 60 + value.second
    return seconds * _NANOS_PER_SECOND + value.microsecond * 1000


_NUMERIC_FIELDS: dict[str, Callable[[datetime], int]] = {
    "y": lambda v: v.year,
    "u": lambda v: v.year,
    "M": lambda v: v.month,
    "L": lambda v: v.month,
    "d": lambda v: v.day,
    "D": lambda v: v.timetuple().tm_yday,
    "H": lambda v: v.hour,
    "k": lambda v: v.hour or 24,
    "K": lambda v: v.hour % 12,
    "h": lambda v: v.hour % 12 or 12,
    "m": lambda v: v.minute,
    "s": lambda v: v.second,
    "n": lambda v: v.microsecond * 1000,
    "N": _nano_of_day,
    "A": lambda v: _nano_of_day(v) // 1_000_000,
}


def _render_field(token: Token, value: datetime, locale: Locale) -> str:
    letter, count = token.value, token.count
    if letter == "S":
        return f"{value.microsecond:06d}000"[:count]
    if letter in ("y", "u") and count == 2:
        return f"{value.year % 100:02d}"
    if letter in _NUMERIC_FIELDS and not (letter in ("M", "L") and count > 2):
        return str(_NUMERIC_FIELDS[letter](value)).zfill(count)
    return babel_format_datetime(value, letter * count, locale=locale)


# --- Parsing ---


@dataclass(frozen=True)
class _ParseField:
    """How one regex group turns into a resolved field value."""

    key: str
    decode: Callable[[str], int | frozenset[int]]


def _name_alternation(names: dict[str, frozenset[int]]) -> str:
    ordered = sorted(names, key=len, reverse=True)
    return "(?:" + "|".join(re.escape(name) for name in ordered) + ")"


def _invert(names: dict[int, str]) -> dict[str, frozenset[int]]:
    inverted: dict[str, set[int]] = {}
    for number, name in names.items():
        inverted.setdefault(name, set()).add(number)
    return {name: frozenset(numbers) for name, numbers in inverted.items()}


def _digits(count: int, *, fixed: bool) -> str:
    if fixed:
        return rf"\d{{{count}}}"
    return rf"\d{{{count},19}}"


def _text_field(key: str, names: dict[str, frozenset[int]]) -> tuple[str, _ParseField]:
    def decode(raw: str) -> int | frozenset[int]:
        numbers = names[raw]
        if key == "weekday":
            return numbers
        return min(numbers)

    return _name_alternation(names), _ParseField(key, decode)


def _field_parser(token: Token, locale: Locale) -> tuple[str, _ParseField]:
    """Return the regex and decoder for a single field token."""
    letter, count = token.value, token.count
    if letter not in PARSEABLE_LETTERS:
        raise InvalidArgumentError(f"Parsing pattern letter {letter!r} is not supported")

    if letter in ("y", "u"):
        key = "year_of_era" if letter == "y" else "year"
        if count == 2:
            return r"\d{2}", _ParseField(key, lambda raw: 2000 + int(raw))
        return _digits(count, fixed=False), _ParseField(key, int)
    if letter in ("M", "L"):
        if count <= 2:
            return _digits(count, fixed=count == 2), _ParseField("month", int)
        context = "format" if letter == "M" else "stand-alone"
        months = get_month_names(_NAME_WIDTHS[count], context, locale)
        return _text_field("month", _invert(dict(months.items())))
    if letter == "E":
        days = get_day_names(_NAME_WIDTHS[count], "format", locale)
        return _text_field("weekday", _invert(dict(days.items())))
    if letter == "G":
        eras = get_era_names(_NAME_WIDTHS[count], locale=locale)
        return _text_field("era", _invert(dict(eras.items())))
    if letter == "a":
        periods = get_period_names("abbreviated", "format", locale)
        names = {periods["am"]: frozenset({0}), periods["pm"]: frozenset({1})}
        return _text_field("ampm", names)
    if letter == "S":
        return rf"\d{{{count}}}", _ParseField("nano", lambda raw: int(raw.ljust(9, "0")))
    if letter == "n":
        return _digits(count, fixed=False), _ParseField("nano", int)
    if letter == "D":
        pattern = {1: r"\d{1,19}", 2: r"\d{2,3}", 3: r"\d{3}"}[count]
        return pattern, _ParseField("day_of_year", int)

    key = {
        "d": "day",
        "H": "hour",
        "k": "clock_hour",
        "K": "hour_of_ampm",
        "h": "clock_hour_of_ampm",
        "m": "minute",
        "s": "second",
    }[letter]
    return _digits(count, fixed=count == 2), _ParseField(key, int)


def _resolve_year(fields: dict[str, int]) -> int:
    if "year" in fields:
        year = fields["year"]
    elif "year_of_era" in fields:
        year_of_era = fields["year_of_era"]
        year = year_of_era if fields.get("era", 1) == 1 else 1 - year_of_era
    else:
        raise ValueError("Unable to obtain a date: no year field was parsed")
    if not MINYEAR <= year <= MAXYEAR:
        raise ValueError(f"Year {year} is out of range")
    return year


def _resolve_date(fields: dict[str, int]) -> date:
    year = _resolve_year(fields)
    if "month" in fields and "day" in fields:
        resolved = date(year, fields["month"], fields["day"])
    elif "day_of_year" in fields:
        day_of_year = fields["day_of_year"]
        if not 1 <= day_of_year <= (366 if calendar.isleap(year) else 365):
            raise ValueError(f"Invalid day of year {day_of_year} for year {year}")
        resolved = date(year, 1, 1) + timedelta(days=day_of_year - 1)
        if fields.get("month", resolved.month) != resolved.month:
            raise ValueError("Conflict found: month does not match day of year")
    else:
        raise ValueError("Unable to obtain a date: month and day were not parsed")

    if "day_of_year" in fields and resolved.timetuple().tm_yday != fields["day_of_year"]:
        raise ValueError("Conflict found: day of year does not match the date")
    return resolved


def _resolve_hour(fields: dict[str, int]) -> int:
    ampm = fields.get("ampm")
    if "hour" in fields:
        hour = fields["hour"]
        if ampm is not None and 0 <= hour <= 23 and hour // 12 != ampm:
            raise ValueError("Conflict found: AM/PM does not match hour of day")
        return hour
    if "clock_hour" in fields:
        clock_hour = fields["clock_hour"]
        if not 1 <= clock_hour <= 24:
            raise ValueError(f"Invalid clock hour of day: {clock_hour}")
        return 0 if clock_hour == 24 else clock_hour
    if "clock_hour_of_ampm" in fields or "hour_of_ampm" in fields:
        if ampm is None:
            raise ValueError("Unable to obtain a time: hour of AM/PM needs an AM/PM field")
        if "clock_hour_of_ampm" in fields:
            clock = fields["clock_hour_of_ampm"]
            if not 1 <= clock <= 12:
                raise ValueError(f"Invalid clock hour of AM/PM: {clock}")
            return clock % 12 + 12 * ampm
        hour_of_ampm = fields["hour_of_ampm"]
        if not 0 <= hour_of_ampm <= 11:
            raise ValueError(f"Invalid hour of AM/PM: {hour_of_ampm}")
        return hour_of_ampm + 12 * ampm
    raise ValueError("Unable to obtain a time: no hour field was parsed")


def _resolve(fields: dict[str, int], weekdays: frozenset[int] | None) -> datetime:
    resolved_date = _resolve_date(fields)
    nano = fields.get("nano", 0)
    if nano >= _NANOS_PER_SECOND:
        raise ValueError(f"Invalid nano of second: {nano}")
    clock = time(
        _resolve_hour(fields),
        fields.get("minute", 0),
        fields.get("second", 0),
        nano // 1000,
    )
    if weekdays is not None and resolved_date.weekday() not in weekdays:
        raise ValueError(f"Conflict found: day of week does not match {resolved_date.isoformat()}")
    return datetime.combine(resolved_date, clock)


# --- Formatter ---


@dataclass(frozen=True)
class DateTimeFormatter:
    """Immutable compiled pattern bound to a locale.

    Build instances with :meth:`of_pattern` or :meth:`of_style`.

    Attributes:
        pattern: The pattern text (for style formatters, the locale's
            combined date+time pattern).
        locale: Babel locale used for text fields.
        style: The style this formatter was built from, if any.
    """

    pattern: str
    locale: Locale
    style: FormatStyle | None = None
    tokens: tuple[Token, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tokenize_pattern(self.pattern))

    @classmethod
    def of_pattern(cls, pattern: str, locale: str | Locale | None = None) -> DateTimeFormatter:
        """Compile *pattern*, failing fast on unrecognized syntax."""
        if pattern is None:
            raise InvalidArgumentError("pattern argument cannot be None")
        if not isinstance(pattern, str):
            raise InvalidArgumentError(f"pattern must be a string, got {type(pattern).__name__}")
        return cls(pattern=pattern, locale=resolve_locale(locale))

    @classmethod
    def of_style(
        cls, style: FormatStyle | str, locale: str | Locale | None = None
    ) -> DateTimeFormatter:
        """Build a formatter from a locale-aware date+time *style*."""
        if style is None:
            raise InvalidArgumentError("style argument cannot be None")
        try:
            resolved_style = FormatStyle(style)
        except ValueError as exc:
            raise InvalidArgumentError(f"Unknown format style: {style!r}") from exc
        resolved_locale = resolve_locale(locale)
        try:
            return cls(
                pattern=style_pattern(resolved_style, resolved_locale),
                locale=resolved_locale,
                style=resolved_style,
            )
        except InvalidArgumentError as exc:
            msg = f"Style {resolved_style} is not available for locale {resolved_locale}: {exc}"
            raise InvalidArgumentError(msg) from exc

    def with_locale(self, locale: str | Locale | None) -> DateTimeFormatter:
        """Return a copy of this formatter bound to *locale*."""
        if self.style is not None:
            return DateTimeFormatter.of_style(self.style, locale)
        return DateTimeFormatter.of_pattern(self.pattern, locale)

    @cached_property
    def _parser(self) -> tuple[re.Pattern[str], dict[str, _ParseField]]:
        parts: list[str] = []
        groups: dict[str, _ParseField] = {}
        for index, token in enumerate(self.tokens):
            if token.kind == LITERAL:
                parts.append(re.escape(token.value))
            elif token.kind == OPTIONAL_START:
                parts.append("(?:")
            elif token.kind == OPTIONAL_END:
                parts.append(")?")
            else:
                regex, parse_field = _field_parser(token, self.locale)
                name = f"f{index}"
                parts.append(f"(?P<{name}>{regex})")
                groups[name] = parse_field
        return re.compile("".join(parts), re.ASCII), groups

    def format(self, value: datetime) -> str:
        """Render *value* with this formatter's pattern and locale."""
        require_naive_datetime(value, "value")
        return "".join(
            token.value if token.kind == LITERAL else _render_field(token, value, self.locale)
            for token in self.tokens
            if token.kind in (FIELD, LITERAL)
        )

    def parse(self, text: str) -> datetime:
        """Strictly parse *text* into a naive datetime.

        Raises:
            InvalidArgumentError: If *text* does not match the pattern or
                the parsed fields do not form a real date and time.
        """
        if text is None:
            raise InvalidArgumentError("text argument cannot be None")
        if not isinstance(text, str):
            raise InvalidArgumentError(f"text must be a string, got {type(text).__name__}")

        regex, groups = self._parser
        match = regex.fullmatch(text)
        if match is None:
            raise InvalidArgumentError(
                f"Text {text!r} could not be parsed with pattern {self.pattern!r}"
            )

        fields: dict[str, int] = {}
        weekdays: frozenset[int] | None = None
        try:
            for name, parse_field in groups.items():
                raw = match.group(name)
                if raw is None:
                    continue
                decoded = parse_field.decode(raw)
                if isinstance(decoded, frozenset):
                    weekdays = decoded if weekdays is None else weekdays & decoded
                    continue
                if fields.setdefault(parse_field.key, decoded) != decoded:
                    msg = f"Conflict found: {parse_field.key} parsed twice with different values"
                    raise ValueError(msg)
            return _resolve(fields, weekdays)
        except ValueError as exc:
            raise InvalidArgumentError(f"Text {text!r} could not be parsed: {exc}") from exc

    def __str__(self) -> str:
        return self.pattern
