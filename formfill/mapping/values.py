"""Conversions shared by the formatter and the validator."""

import json
import math
import re
from typing import Any

JSONValue = dict[str, "JSONValue"] | list["JSONValue"] | str | int | float | bool | None

CHECKMARK = "✓"
CHECKED_VALUES: frozenset[str] = frozenset({"true", "X", "Yes", "1", CHECKMARK})
UNCHECKED_VALUES: frozenset[str] = frozenset({"false", "", "No", "0"})

_LEADING_FLOAT_RE = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def is_empty(value: Any) -> bool:
    """None and the empty string count as "no value"."""
    return value is None or (isinstance(value, str) and value == "")


def is_truthy(value: Any) -> bool:
    # Containers count as set even when empty.
    if isinstance(value, (list, dict)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def to_display_string(value: Any) -> str:
    """Plain string form of a raw value, as JSON would spell its scalars."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ",".join(to_display_string(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def parse_float(value: Any) -> float | None:
    """Read the leading decimal number of a value.

    Returns None when there is no number to read or it is not finite.
    Booleans are not numbers here.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_FLOAT_RE.match(to_display_string(value).lstrip())
        if match is None:
            return None
        number = float(match.group(0).replace("Infinity", "inf"))
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def is_checkbox_checked(value: Any) -> bool:
    """Whether a value is one of the explicit "checked" spellings."""
    if value is True:
        return True
    return isinstance(value, str) and value in CHECKED_VALUES
