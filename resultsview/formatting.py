"""
Field value formatting.

The renderers take the formatter as an injected callable with the
signature (field, value, pretty) -> str. A falsy return renders as an
empty cell. format_field_value is the HTML formatter used by default,
plain_field_value is its terminal counterpart.
"""

import json
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Mapping, Optional

from markupsafe import escape

from .models import FieldInfo


FieldFormatter = Callable[[FieldInfo, Any, bool], Optional[str]]

JSON_FORMATS = {'json', 'jsonb', 'point', 'circle'}
TEXT_TRUNCATE_AT = 150


def _count(amount: Any, unit: str, plural: str) -> str:
    return f"{amount} {unit if amount == 1 else plural}"


def _clock(delta: timedelta) -> str:
    """Signed HH:MM:SS[.ffffff] for a time span; hours may exceed 24."""
    sign = '-' if delta < timedelta(0) else ''
    delta = abs(delta)
    hours, remainder = divmod(delta.days * 86400 + delta.seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    clock = f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}"
    if delta.microseconds:
        clock += f".{delta.microseconds:06d}".rstrip('0')
    return clock


def format_interval(value: Any) -> str:
    """
    Render an interval Postgres style, e.g. '1 year 2 mons 3 days 04:05:06'.

    Accepts a timedelta or a mapping with years/months/days/hours/minutes/
    seconds/milliseconds keys. Negative parts carry their own sign
    ('-01:00:00', '-1 days -02:00:00'). Anything else is passed through str().
    """
    if isinstance(value, timedelta):
        sign = -1 if value < timedelta(0) else 1
        magnitude = abs(value)
        years = months = 0
        days = magnitude.days * sign
        time_part = timedelta(seconds=magnitude.seconds, microseconds=magnitude.microseconds) * sign
    elif isinstance(value, Mapping):
        years = value.get('years') or 0
        months = value.get('months') or 0
        days = value.get('days') or 0
        time_part = timedelta(
            hours=value.get('hours') or 0,
            minutes=value.get('minutes') or 0,
            seconds=value.get('seconds') or 0,
            milliseconds=value.get('milliseconds') or 0,
        )
    else:
        return str(value)

    parts = []
    if years:
        parts.append(_count(years, 'year', 'years'))
    if months:
        parts.append(_count(months, 'mon', 'mons'))
    if days:
        parts.append(_count(days, 'day', 'days'))
    if time_part or not parts:
        parts.append(_clock(time_part))
    return ' '.join(parts)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def to_display_string(field: FieldInfo, value: Any, pretty: bool) -> str:
    """Convert a raw value to its unescaped display string."""
    fmt = field.format
    if fmt in JSON_FORMATS:
        return json.dumps(value, indent=2 if pretty else None, default=_json_default)
    if fmt == 'interval':
        return format_interval(value)
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return '\\x' + bytes(value).hex()
    return str(value)


def format_field_value(field: FieldInfo, value: Any, pretty: bool = False) -> str:
    """
    Format a value for an HTML table cell.

    NULL renders as an italic marker. The string is HTML-escaped, and long
    text values are truncated with an ellipsis entity.

    Args:
        field: Column metadata, its format selects the conversion
        value: Raw value from the row
        pretty: Indent JSON-like values

    Returns:
        HTML-safe string
    """
    if value is None:
        return '<i>null</i>'

    text = to_display_string(field, value, pretty)
    # Truncate before escaping so entities are never cut in half
    if field.format == 'text' and len(text) > TEXT_TRUNCATE_AT:
        return str(escape(text[:TEXT_TRUNCATE_AT - 2])) + '&hellip;'
    return str(escape(text))


def plain_field_value(field: FieldInfo, value: Any, pretty: bool = False) -> str:
    """Format a value for terminal output: no escaping, NULL spelled out."""
    if value is None:
        return 'NULL'
    return to_display_string(field, value, pretty)
