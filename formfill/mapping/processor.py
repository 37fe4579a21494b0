from typing import Any

from formfill.logging.logger import Log
from formfill.mapping.formatter import format_value
from formfill.mapping.models import (
    FilledField,
    ProcessingResult,
    ValidationError,
    ValidationResult,
)
from formfill.mapping.resolver import resolve_path
from formfill.mapping.validator import validate_field
from formfill.mapping.values import JSONValue, to_display_string
from formfill.templates.models import Annotation, Template


class TemplateProcessor:
    """Maps input data onto a template and validates it.

    Validation and mapping are independent passes: fields are produced even
    when validation fails, so draft forms still render. Neither pass raises.
    """

    def process(self, raw_data: JSONValue, template: Template) -> ProcessingResult:
        """Produce one FilledField per annotation plus all validation errors."""
        Log.debug(
            f"Processing template {template.template_id}: "
            f"{len(template.annotations)} annotations"
        )
        validation = self._validate(raw_data, template)
        filled_fields = [self._map_field(raw_data, a) for a in template.annotations]
        Log.info(
            f"Processed template {template.template_id}: {len(filled_fields)} fields, "
            f"{len(validation.errors)} validation errors"
        )
        return ProcessingResult(filled_fields=filled_fields, validation=validation)

    def _validate(self, raw_data: JSONValue, template: Template) -> ValidationResult:
        errors: list[ValidationError] = []
        for annotation in template.annotations:
            try:
                error = validate_field(resolve_path(raw_data, annotation.data_path), annotation)
            except Exception as exc:
                Log.error(f"Error validating field {annotation.field_id}: {exc}")
                continue
            if error is not None:
                errors.append(error)
        return ValidationResult(valid=not errors, errors=errors)

    @staticmethod
    def _map_field(raw_data: JSONValue, annotation: Annotation) -> FilledField:
        try:
            raw_value = resolve_path(raw_data, annotation.data_path)
            display_value = format_value(raw_value, annotation).display
            return FilledField(
                field_id=annotation.field_id,
                position=annotation.position,
                raw_value=raw_value,
                display_value=display_value,
                formatted=display_value != to_display_string(raw_value),
            )
        except Exception as exc:
            Log.error(f"Error processing field {annotation.field_id}: {exc}")
            return FilledField(
                field_id=annotation.field_id,
                position=annotation.position,
                raw_value=None,
                display_value="",
                formatted=False,
            )


def map_and_validate(raw_data: Any, template: Template) -> ProcessingResult:
    """Run a TemplateProcessor over *raw_data*."""
    return TemplateProcessor().process(raw_data, template)
