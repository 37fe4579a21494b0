from typing import Any

import pytest

from formfill.analysis.families import load_form_family
from formfill.analysis.models import FormFamilyConfig
from formfill.templates.loader import bundled_templates
from formfill.templates.models import (
    Annotation,
    FormatRules,
    Position,
    Template,
    ValidationRules,
)


def make_annotation(
    field_id: str = "field",
    data_path: str = "value",
    field_type: str = "text",
    format_rules: FormatRules | None = None,
    validation_rules: ValidationRules | None = None,
) -> Annotation:
    return Annotation(
        field_id=field_id,
        position=Position(x=72, y=140, width=110, height=12, page=1),
        data_path=data_path,
        field_type=field_type,  # type: ignore[arg-type]
        format_rules=format_rules,
        validation_rules=validation_rules,
    )


def make_template(*annotations: Annotation, **overrides: Any) -> Template:
    fields: dict[str, Any] = {
        "template_id": "tmpl_test_2024_v1",
        "form_type": "TEST",
        "form_name": "Test Form",
        "tax_year": 2024,
        "version": "1.0.0",
    }
    fields.update(overrides)
    return Template(annotations=list(annotations), **fields)


@pytest.fixture()
def templates_by_id() -> dict[str, Template]:
    return {t.template_id: t for t in bundled_templates()}


@pytest.fixture()
def form_1040(templates_by_id: dict[str, Template]) -> Template:
    return templates_by_id["tmpl_1040_2024_v1"]


@pytest.fixture()
def form_1040_extended(templates_by_id: dict[str, Template]) -> Template:
    return templates_by_id["tmpl_1040_extended_2024_v1"]


@pytest.fixture()
def family_config() -> FormFamilyConfig:
    return load_form_family("individual_income")


@pytest.fixture()
def taxpayer_data() -> dict[str, Any]:
    """Complete, valid input for the 1040 template."""
    return {
        "taxpayer": {
            "firstName": "John",
            "lastName": "Doe",
            "ssn": "123456789",
            "address": {
                "street": "123 Main Street",
                "city": "New York",
                "state": "NY",
                "zip": "10001",
            },
        },
        "income": {"wages": 75000, "interest": 1200.5, "dividends": 800},
    }
