"""String heuristics and schema-forced casts.

Every function here returns the converted value, or ``None`` when it
declines. Parse failures are contained locally so callers can chain
attempts without handling exceptions.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterator, Mapping, Sequence
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from fieldcast.models.options import CasterOptions
from fieldcast.models.schema import SchemaTag

# Longest ISO-8601 datetime with a zone suffix: yyyy-mm-ddTHH:MM:SSZ
DATE_MAX_CHARS = 20
# len("false")
BOOLEAN_MAX_CHARS = 5

_INTEGER_LITERAL = re.compile(r"[+-]?\d+")
_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_PREFIXED_LITERAL = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_ISO_DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")
_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}
# integral floats at or above this render in exponent form, e.g. 1e+21
_EXPONENT_FORM_FROM = 1e21
_PADDED_EXPONENT = re.compile(r"e([+-])0+(\d)")


def is_number(value: Any) -> bool:
    """True for int, float and Decimal values; bool is not a number here."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def is_blank(value: Any) -> bool:
    """None, empty strings, False, numeric zero and NaN are never cast."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value
    return is_number(value) and (value == 0 or value != value)


# ---------------------------------------------------------------------------
# String heuristics
# ---------------------------------------------------------------------------

def parse_number(text: str) -> int | float | None:
    stripped = text.strip()
    if not stripped:
        return None
    if stripped in _INFINITIES:
        return _INFINITIES[stripped]
    if _INTEGER_LITERAL.fullmatch(stripped):
        try:
            return int(stripped)
        except ValueError:
            # past the int string conversion digit limit
            return float(stripped)
    if _PREFIXED_LITERAL.fullmatch(stripped):
        return int(stripped, 0)
    if _DECIMAL_LITERAL.fullmatch(stripped):
        return float(stripped)
    return None


def parse_date(
    text: str,
    patterns: Sequence[re.Pattern[str]],
    formats: Sequence[str] = (),
) -> datetime | None:
    """Parse ``text`` into a datetime once it matches one of ``patterns``.

    ISO-8601 is tried first, then each ``strptime`` format in order.
    Date-only ISO values and ``Z``-suffixed ones come back UTC aware;
    everything else keeps whatever offset the text carried, if any.
    """
    if not any(pattern.search(text) for pattern in patterns):
        return None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None
    if parsed is not None:
        if parsed.tzinfo is None and _ISO_DATE_ONLY.fullmatch(text):
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_boolean(text: str) -> bool | None:
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_object(text: str) -> dict[str, Any] | list[Any] | None:
    """Parse JSON text; only objects and arrays count as success."""
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if isinstance(parsed, (dict, list)):
        return parsed
    return None


def _string_attempts(text: str, options: CasterOptions, forced: Optional[SchemaTag]) -> Iterator[Any]:
    # Order is fixed: number, date, boolean, object.
    length = len(text)
    if forced is SchemaTag.NUMBER or (options.strings_to_numbers and length <= options.number_max_chars):
        yield parse_number(text)
    if forced is SchemaTag.DATE or (options.strings_to_dates and length <= DATE_MAX_CHARS):
        yield parse_date(text, options.dates_match_regex, options.date_formats)
    if forced is SchemaTag.BOOLEAN or (options.strings_to_booleans and length <= BOOLEAN_MAX_CHARS):
        yield parse_boolean(text)
    if forced is SchemaTag.OBJECT or options.strings_to_objects:
        yield parse_object(text)


def cast_string(text: str, options: CasterOptions, forced: Optional[SchemaTag] = None) -> Any:
    """Run the string heuristics; the first one that succeeds wins.

    A heuristic runs when its toggle is on and the text passes its length
    gate, or unconditionally when ``forced`` names its type.

    Returns:
        The converted value, or None when every eligible heuristic declined.
    """
    return next((value for value in _string_attempts(text, options, forced) if value is not None), None)


# ---------------------------------------------------------------------------
# Schema-forced casts for values that are not strings
# ---------------------------------------------------------------------------

class _RecordEncoder(json.JSONEncoder):
    """Encode Decimal and datetime values found in nested records."""

    def default(self, o: Any) -> Any:
        if isinstance(o, Decimal):
            return int(o) if o == o.to_integral_value() else float(o)
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        return super().default(o)


def number_to_string(value: int | float | Decimal) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < _EXPONENT_FORM_FROM:
            return str(int(value))
        return _PADDED_EXPONENT.sub(r"e\1\2", repr(value))
    return str(value)


def number_to_date(value: int | float | Decimal) -> datetime | None:
    """Interpret ``value`` as milliseconds since the Unix epoch."""
    try:
        return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def object_to_string(value: Any) -> str | None:
    try:
        return json.dumps(value, cls=_RecordEncoder, separators=(",", ":"))
    except (TypeError, ValueError):
        return None


def cast_forced(value: Any, target: SchemaTag) -> Any:
    """Cast a non-string value to the type a schema forces on it.

    Returns:
        The converted value, or None when the combination is not supported.
    """
    if is_number(value):
        if target is SchemaTag.BOOLEAN:
            return value != 0
        if target is SchemaTag.STRING:
            return number_to_string(value)
        if target is SchemaTag.DATE:
            return number_to_date(value)
        return None
    if target is SchemaTag.STRING and isinstance(value, (Mapping, list, tuple)):
        return object_to_string(value)
    return None
