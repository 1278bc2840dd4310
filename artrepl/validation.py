"""Validators for replication attributes."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit


class ValidationError(ValueError):
    """An attribute value was rejected."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key


_MONTHS = {
    name: number
    for number, names in enumerate(
        (
            ("jan", "january"),
            ("feb", "february"),
            ("mar", "march"),
            ("apr", "april"),
            ("may",),
            ("jun", "june"),
            ("jul", "july"),
            ("aug", "august"),
            ("sep", "september"),
            ("oct", "october"),
            ("nov", "november"),
            ("dec", "december"),
        ),
        start=1,
    )
    for name in names
}

_DAYS = {
    name: number
    for number, names in enumerate(
        (
            ("sun", "sunday"),
            ("mon", "monday"),
            ("tue", "tuesday"),
            ("wed", "wednesday"),
            ("thu", "thursday"),
            ("fri", "friday"),
            ("sat", "saturday"),
        )
    )
    for name in names
}


@dataclass(frozen=True)
class _CronField:
    name: str
    minimum: int
    maximum: int
    names: Mapping[str, int] = field(default_factory=dict)
    extra: re.Pattern[str] | None = None


_SECOND = _CronField("second", 0, 59)
_FIELDS = (
    _CronField("minute", 0, 59),
    _CronField("hour", 0, 23),
    _CronField("day-of-month", 1, 31, extra=re.compile(r"^(?:l|lw|\d{1,2}w)$")),
    _CronField("month", 1, 12, _MONTHS),
    _CronField("day-of-week", 0, 7, _DAYS, re.compile(r"^(?:[0-7]l|[0-7]#[1-5])$")),
    _CronField("year", 1970, 2099),
)

_ENTRY = re.compile(
    r"^(?:(?P<wild>[*?])|(?P<first>\d+|[a-z]+)(?:-(?P<last>\d+|[a-z]+))?)(?:/(?P<step>\d+))?$"
)

_PREDEFINED = {"@yearly", "@annually", "@monthly", "@weekly", "@daily", "@hourly"}


def _field_value(spec: _CronField, text: str) -> int | None:
    number = int(text) if text.isdigit() else spec.names.get(text)
    if number is None or not spec.minimum <= number <= spec.maximum:
        return None
    return number


def _entry_ok(spec: _CronField, entry: str) -> bool:
    if spec.extra is not None and spec.extra.match(entry):
        return True
    match = _ENTRY.match(entry)
    if match is None:
        return False
    if match["step"] is not None and int(match["step"]) == 0:
        return False
    if match["wild"] is not None:
        return True
    bounds = [match["first"]] + ([match["last"]] if match["last"] else [])
    return all(_field_value(spec, bound) is not None for bound in bounds)


def _check_field(spec: _CronField, text: str) -> None:
    if not all(_entry_ok(spec, entry) for entry in text.lower().split(",")):
        raise ValueError(f"syntax error in {spec.name} field: '{text}'")


def validate_cron(value: Any, key: str = "cron_exp") -> str:
    """Check a cron expression of 5 to 7 fields; return it unchanged."""
    if not isinstance(value, str):
        raise ValidationError(key, f'expected type of "{key}" to be string')
    expression = value.strip()
    if expression.lower() in _PREDEFINED:
        return value
    fields = expression.split()
    if len(fields) < 5:
        raise ValidationError(key, f"invalid cron expression {value!r}: missing field(s)")
    fields = fields[:7]
    specs = (_SECOND, *_FIELDS) if len(fields) == 7 else _FIELDS
    try:
        for spec, text in zip(specs, fields):
            _check_field(spec, text)
    except ValueError as exc:
        raise ValidationError(key, f"invalid cron expression {value!r}: {exc}") from None
    return value


def validate_url(value: Any, key: str = "url") -> str:
    """Check that a value is an http or https URL with a host; return it unchanged."""
    schemes = ("http", "https")
    if not isinstance(value, str):
        raise ValidationError(key, f'expected type of "{key}" to be string')
    if value == "":
        raise ValidationError(key, f'expected "{key}" url to not be empty, got {value}')
    try:
        parts = urlsplit(value)
    except ValueError as exc:
        raise ValidationError(key, f'expected "{key}" to be a valid url, got {value}: {exc}') from None
    if not parts.netloc:
        raise ValidationError(key, f'expected "{key}" to have a host, got {value}')
    if parts.scheme not in schemes:
        joined = ",".join(schemes)
        raise ValidationError(
            key, f'expected "{key}" to have a url with schema of: "{joined}", got {value}'
        )
    return value


def validate_int_at_least(value: Any, minimum: int, key: str = "socket_timeout_millis") -> int:
    """Check that a value is an integer no smaller than the minimum; return it."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(key, f"expected type of {key} to be integer")
    if value < minimum:
        raise ValidationError(key, f"expected {key} to be at least ({minimum}), got {value}")
    return value


def validate_not_empty(value: Any, key: str) -> str:
    """Check that a value is a non-empty string; return it."""
    if not isinstance(value, str):
        raise ValidationError(key, f'expected type of "{key}" to be string')
    if value == "":
        raise ValidationError(key, f'expected "{key}" to not be an empty string, got {value}')
    return value