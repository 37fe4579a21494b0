from dataclasses import dataclass, field
from typing import Literal

FieldType = Literal["text", "number", "currency", "ssn", "date", "checkbox"]
TextCase = Literal["uppercase", "lowercase", "titlecase"]
NumberType = Literal["currency", "percentage", "decimal", "integer"]

FIELD_TYPES: frozenset[str] = frozenset(
    {"text", "number", "currency", "ssn", "date", "checkbox"}
)


@dataclass(frozen=True)
class Position:
    """Placement of a field on the page. Opaque to the engine."""

    x: float
    y: float
    width: float
    height: float
    page: int = 1


@dataclass(frozen=True)
class FormatRules:
    """How a raw value is rendered into its display string."""

    pattern: str | None = None
    mask: bool | None = None
    case: TextCase | None = None
    max_length: int | None = None
    type: NumberType | None = None
    precision: int | None = None


@dataclass(frozen=True)
class ValidationRules:
    """Per-field constraints checked against the raw value."""

    required: bool | None = None
    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None


@dataclass(frozen=True)
class Annotation:
    """One output field of a template."""

    field_id: str
    position: Position
    data_path: str
    field_type: FieldType
    format_rules: FormatRules | None = None
    validation_rules: ValidationRules | None = None


@dataclass(frozen=True)
class Template:
    """An ordered collection of annotations describing one form version."""

    template_id: str
    form_type: str
    form_name: str
    tax_year: int
    version: str
    annotations: list[Annotation] = field(default_factory=list)
    page_count: int = 1
    created_at: str | None = None
    updated_at: str | None = None
    created_by: str | None = None
