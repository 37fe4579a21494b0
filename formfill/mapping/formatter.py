"""Turns raw values into display strings according to field type and format rules."""

import math
import re
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from dateutil import parser as date_parser
from dateutil.parser import ParserError

from formfill.logging.logger import Log
from formfill.mapping.models import FormatDegraded, FormatOk, FormatOutcome
from formfill.mapping.values import (
    CHECKMARK,
    UNCHECKED_VALUES,
    is_checkbox_checked,
    is_empty,
    is_truthy,
    parse_float,
    to_display_string,
)
from formfill.templates.models import Annotation, FormatRules

SSN_PATTERN = "###-##-####"
US_DATE_PATTERN = "MM/DD/YYYY"
ISO_DATE_PATTERN = "YYYY-MM-DD"

_DEFAULT_PRECISION = 2
# Date parts missing from a string are taken from here, never from today.
_DATE_DEFAULTS = datetime(2001, 1, 1)
_TITLE_WORD_RE = re.compile(r"\w\S*")


def format_value(raw_value: Any, annotation: Annotation) -> FormatOutcome:
    """Render *raw_value* for the field described by *annotation*.

    Empty values render as "". Any fault while formatting degrades to the
    raw value's plain string and is logged as a warning.
    """
    if is_empty(raw_value):
        return FormatOk("")
    text = to_display_string(raw_value)
    try:
        return FormatOk(_dispatch(raw_value, text, annotation))
    except Exception as exc:
        Log.warning(f"Formatting error for field {annotation.field_id}: {exc}")
        return FormatDegraded(display=text, reason=str(exc))


def format_display(raw_value: Any, annotation: Annotation) -> str:
    return format_value(raw_value, annotation).display


def _dispatch(raw_value: Any, text: str, annotation: Annotation) -> str:
    rules = annotation.format_rules or FormatRules()
    field_type = annotation.field_type
    if field_type == "ssn":
        return _format_ssn(text, rules)
    if field_type == "currency":
        return _format_currency(raw_value, text, rules)
    if field_type == "number":
        return _format_number(raw_value, text, rules)
    if field_type == "date":
        return _format_date(raw_value, text, rules)
    if field_type == "checkbox":
        return _format_checkbox(raw_value)
    return _format_text(text, rules)


def _format_ssn(text: str, rules: FormatRules) -> str:
    if rules.pattern == SSN_PATTERN and len(text) == 9:
        return f"{text[:3]}-{text[3:5]}-{text[5:]}"
    return text


def _format_currency(raw_value: Any, text: str, rules: FormatRules) -> str:
    if rules.type != "currency":
        return text
    number = parse_float(raw_value)
    if number is None:
        return text
    amount = _group_digits(abs(number), 2)
    return f"-${amount}" if number < 0 else f"${amount}"


def _format_number(raw_value: Any, text: str, rules: FormatRules) -> str:
    number = parse_float(raw_value)
    if number is None:
        return text
    precision = _DEFAULT_PRECISION if rules.precision is None else int(rules.precision)
    if rules.type == "percentage":
        # value / 100 shown as a percent is the value itself with a % sign
        return f"{_group_digits(number, precision)}%"
    if rules.type == "decimal":
        return _group_digits(number, precision)
    if rules.type == "integer":
        return str(math.floor(number + 0.5))
    return text


def _format_date(raw_value: Any, text: str, rules: FormatRules) -> str:
    if not rules.pattern:
        return text
    parsed = _parse_date(raw_value)
    if parsed is None:
        return text
    if rules.pattern == US_DATE_PATTERN:
        return f"{parsed.month}/{parsed.day}/{parsed.year}"
    if rules.pattern == ISO_DATE_PATTERN:
        return parsed.date().isoformat()
    return text


def _format_checkbox(raw_value: Any) -> str:
    if is_checkbox_checked(raw_value):
        return CHECKMARK
    if raw_value is False or (isinstance(raw_value, str) and raw_value in UNCHECKED_VALUES):
        return ""
    return CHECKMARK if is_truthy(raw_value) else ""


def _format_text(text: str, rules: FormatRules) -> str:
    if rules.case == "uppercase":
        text = text.upper()
    elif rules.case == "lowercase":
        text = text.lower()
    elif rules.case == "titlecase":
        text = _TITLE_WORD_RE.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)
    if rules.max_length and len(text) > rules.max_length:
        text = text[: rules.max_length]
    return text


def _group_digits(number: float, precision: int) -> str:
    """US-style grouped decimal, rounding half away from zero."""
    quantum = Decimal(1).scaleb(-precision)
    rounded = Decimal(repr(number)).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:,.{precision}f}"


def _parse_date(raw_value: Any) -> datetime | None:
    if isinstance(raw_value, datetime):
        parsed = raw_value
    elif isinstance(raw_value, date):
        parsed = datetime(raw_value.year, raw_value.month, raw_value.day)
    elif isinstance(raw_value, bool):
        return None
    elif isinstance(raw_value, (int, float)):
        # Numbers are epoch milliseconds.
        try:
            parsed = datetime.fromtimestamp(raw_value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(raw_value, str):
        try:
            parsed = date_parser.parse(raw_value, default=_DATE_DEFAULTS)
        except (ParserError, ValueError, OverflowError):
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed
