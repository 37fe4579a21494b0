from formfill.mapping.formatter import format_value
from formfill.mapping.processor import TemplateProcessor, map_and_validate
from formfill.mapping.resolver import resolve_path, set_path
from formfill.mapping.validator import validate_field

__all__ = [
    "TemplateProcessor",
    "format_value",
    "map_and_validate",
    "resolve_path",
    "set_path",
    "validate_field",
]
