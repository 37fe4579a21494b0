"""Helpers for presenting a field requirement as an input control."""

from typing import Any

from formfill.mapping.resolver import resolve_path, set_path
from formfill.mapping.values import CHECKMARK, JSONValue, is_checkbox_checked

__all__ = [
    "format_checkbox_value",
    "get_field_value",
    "get_input_type",
    "get_max_length",
    "get_placeholder",
    "is_checkbox_checked",
    "set_field_value",
]

_DEFAULT_MAX_LENGTHS = {"ssn": 9, "state": 2, "zip": 10}
_DEFAULT_PLACEHOLDERS = {"ssn": "123456789", "state": "NY", "zip": "10001", "number": "0"}


def get_input_type(field_type: str) -> str:
    if field_type in ("number", "email", "checkbox"):
        return field_type
    return "text"


def get_max_length(field_type: str, custom_max_length: int | None = None) -> int | None:
    if custom_max_length:
        return custom_max_length
    return _DEFAULT_MAX_LENGTHS.get(field_type)


def get_placeholder(field_type: str, custom_placeholder: str | None = None) -> str | None:
    if custom_placeholder:
        return custom_placeholder
    return _DEFAULT_PLACEHOLDERS.get(field_type)


def format_checkbox_value(checked: bool) -> str:
    return CHECKMARK if checked else ""


def get_field_value(data: JSONValue, path: str) -> Any:
    """Current value of a field in an input document being edited."""
    return resolve_path(data, path)


def set_field_value(data: JSONValue, path: str, value: JSONValue) -> JSONValue:
    """Return an edited copy of the input document. *data* is left untouched."""
    return set_path(data, path, value)
