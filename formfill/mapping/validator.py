"""Checks a raw field value against the validation rules of its annotation."""

import re
from typing import Any

from formfill.logging.logger import Log
from formfill.mapping.models import ValidationError
from formfill.mapping.values import is_empty, is_truthy, parse_float, to_display_string
from formfill.templates.models import Annotation, ValidationRules

REQUIRED_MESSAGE = "Required field is missing"

_NUMERIC_FIELD_TYPES = frozenset({"number", "currency"})


def validate_field(raw_value: Any, annotation: Annotation) -> ValidationError | None:
    """Return the first rule *raw_value* breaks, or None.

    Order: required, pattern, minLength, maxLength, then min/max for
    number and currency fields. Optional values that are empty or falsy
    (0, False) pass without further checks.
    """
    rules = annotation.validation_rules
    if rules is None:
        return None

    if rules.required and is_empty(raw_value):
        return _error(annotation, REQUIRED_MESSAGE)
    if not rules.required and not is_truthy(raw_value):
        return None

    text = to_display_string(raw_value)
    message = (
        _check_pattern(text, rules, annotation)
        or _check_length(text, rules)
        or _check_range(raw_value, rules, annotation)
    )
    return _error(annotation, message) if message else None


def _error(annotation: Annotation, message: str) -> ValidationError:
    return ValidationError(
        field_id=annotation.field_id,
        error=message,
        data_path=annotation.data_path,
    )


def _check_pattern(text: str, rules: ValidationRules, annotation: Annotation) -> str | None:
    if not rules.pattern:
        return None
    try:
        regex = re.compile(rules.pattern)
    except re.error as exc:
        Log.error(
            f"Skipping invalid pattern {rules.pattern!r} for field {annotation.field_id}: {exc}"
        )
        return None
    if regex.search(text) is None:
        return f"Value does not match required pattern: {rules.pattern}"
    return None


def _check_length(text: str, rules: ValidationRules) -> str | None:
    if rules.min_length and len(text) < rules.min_length:
        return f"Value must be at least {rules.min_length} characters"
    if rules.max_length and len(text) > rules.max_length:
        return f"Value cannot exceed {rules.max_length} characters"
    return None


def _check_range(raw_value: Any, rules: ValidationRules, annotation: Annotation) -> str | None:
    if annotation.field_type not in _NUMERIC_FIELD_TYPES:
        return None
    number = parse_float(raw_value)
    if number is None:
        return None
    if rules.min is not None and number < rules.min:
        return f"Value must be at least {to_display_string(rules.min)}"
    if rules.max is not None and number > rules.max:
        return f"Value cannot exceed {to_display_string(rules.max)}"
    return None
