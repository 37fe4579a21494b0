"""Builds Template models from their JSON documents and back."""

from typing import Any

from formfill.templates.exceptions import TemplateParseError
from formfill.templates.models import (
    FIELD_TYPES,
    Annotation,
    FormatRules,
    Position,
    Template,
    ValidationRules,
)

_FORMAT_KEYS = {
    "pattern": "pattern",
    "mask": "mask",
    "case": "case",
    "maxLength": "max_length",
    "type": "type",
    "precision": "precision",
}
_VALIDATION_KEYS = {
    "required": "required",
    "min": "min",
    "max": "max",
    "pattern": "pattern",
    "minLength": "min_length",
    "maxLength": "max_length",
}


def parse_template(document: Any) -> Template:
    """Build a Template from its JSON object.

    Only the structure is checked. Rule values are taken as given.

    Raises:
        TemplateParseError: on any structural problem.
    """
    if not isinstance(document, dict):
        raise TemplateParseError("Template must be an object")
    raw_annotations = document.get("annotations", [])
    if not isinstance(raw_annotations, list):
        raise TemplateParseError("'annotations' must be a list")
    tax_year = document.get("tax_year", 0)
    if isinstance(tax_year, bool) or not isinstance(tax_year, int):
        raise TemplateParseError("'tax_year' must be an integer")
    return Template(
        template_id=_optional_str(document, "template_id") or "",
        form_type=_optional_str(document, "form_type") or "",
        form_name=_optional_str(document, "form_name") or "",
        tax_year=tax_year,
        version=_optional_str(document, "version") or "",
        annotations=[_build_annotation(item, i) for i, item in enumerate(raw_annotations)],
        page_count=int(document.get("page_count", 1) or 1),
        created_at=_optional_str(document, "created_at"),
        updated_at=_optional_str(document, "updated_at"),
        created_by=_optional_str(document, "created_by"),
    )


def template_to_dict(template: Template) -> dict[str, Any]:
    """Render a Template back into its JSON object."""
    document: dict[str, Any] = {
        "template_id": template.template_id,
        "form_type": template.form_type,
        "form_name": template.form_name,
        "tax_year": template.tax_year,
        "version": template.version,
        "page_count": template.page_count,
        "annotations": [annotation_to_dict(a) for a in template.annotations],
    }
    for key in ("created_at", "updated_at", "created_by"):
        value = getattr(template, key)
        if value is not None:
            document[key] = value
    return document


def annotation_to_dict(annotation: Annotation) -> dict[str, Any]:
    document: dict[str, Any] = {
        "field_id": annotation.field_id,
        "position": position_to_dict(annotation.position),
        "data_path": annotation.data_path,
        "field_type": annotation.field_type,
    }
    if annotation.format_rules is not None:
        document["format_rules"] = _rules_to_dict(annotation.format_rules, _FORMAT_KEYS)
    if annotation.validation_rules is not None:
        document["validation_rules"] = _rules_to_dict(
            annotation.validation_rules, _VALIDATION_KEYS
        )
    return document


def position_to_dict(position: Position) -> dict[str, Any]:
    return {
        "x": position.x,
        "y": position.y,
        "width": position.width,
        "height": position.height,
        "page": position.page,
    }


def _optional_str(document: dict[str, Any], key: str) -> str | None:
    value = document.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TemplateParseError(f"'{key}' must be a string")
    return value


def _build_annotation(raw: Any, index: int) -> Annotation:
    if not isinstance(raw, dict):
        raise TemplateParseError(f"Annotation at index {index} must be an object")
    field_id = raw.get("field_id")
    if not field_id or not isinstance(field_id, str):
        raise TemplateParseError(
            f"Annotation at index {index}: 'field_id' must be a non-empty string"
        )
    data_path = raw.get("data_path")
    if not isinstance(data_path, str):
        raise TemplateParseError(
            f"Annotation at index {index}: 'data_path' must be a string"
        )
    field_type = raw.get("field_type")
    if field_type not in FIELD_TYPES:
        raise TemplateParseError(
            f"Annotation at index {index}: 'field_type' must be one of "
            f"{sorted(FIELD_TYPES)}, got {field_type!r}"
        )
    return Annotation(
        field_id=field_id,
        position=_build_position(raw.get("position"), index),
        data_path=data_path,
        field_type=field_type,
        format_rules=_build_rules(raw.get("format_rules"), index, "format_rules"),
        validation_rules=_build_rules(raw.get("validation_rules"), index, "validation_rules"),
    )


def _build_position(raw: Any, index: int) -> Position:
    if not isinstance(raw, dict):
        raise TemplateParseError(f"Annotation at index {index}: 'position' must be an object")
    values: dict[str, Any] = {}
    for key in ("x", "y", "width", "height"):
        value = raw.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TemplateParseError(
                f"Annotation at index {index}: 'position.{key}' must be a number"
            )
        values[key] = value
    page = raw.get("page", 1)
    if isinstance(page, bool) or not isinstance(page, int):
        raise TemplateParseError(
            f"Annotation at index {index}: 'position.page' must be an integer"
        )
    return Position(page=page, **values)


def _build_rules(raw: Any, index: int, name: str) -> Any:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise TemplateParseError(f"Annotation at index {index}: '{name}' must be an object")
    if name == "format_rules":
        return FormatRules(**_rule_values(raw, _FORMAT_KEYS))
    return ValidationRules(**_rule_values(raw, _VALIDATION_KEYS))


def _rule_values(raw: dict[str, Any], keys: dict[str, str]) -> dict[str, Any]:
    # camelCase keys win over their snake_case spelling.
    return {attr: raw.get(key, raw.get(attr)) for key, attr in keys.items()}


def _rules_to_dict(
    rules: FormatRules | ValidationRules, keys: dict[str, str]
) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, attr in keys.items():
        value = getattr(rules, attr)
        if value is not None:
            out[key] = value
    return out
