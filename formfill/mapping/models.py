from dataclasses import asdict, dataclass, field
from typing import Any

from formfill.mapping.values import JSONValue
from formfill.templates.models import Position


@dataclass(frozen=True)
class FormatOk:
    """Display string produced by the formatting rules."""

    display: str


@dataclass(frozen=True)
class FormatDegraded:
    """Display string that fell back to the raw value after a formatting fault."""

    display: str
    reason: str


FormatOutcome = FormatOk | FormatDegraded


@dataclass(frozen=True)
class FilledField:
    """A template field with its resolved and formatted value."""

    field_id: str
    position: Position
    raw_value: JSONValue
    display_value: str
    formatted: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ValidationError:
    """A failed validation rule for one field. Returned as data, never raised."""

    field_id: str
    error: str
    data_path: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ValidationResult:
    """All validation errors of a processing run, in annotation order."""

    valid: bool
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class ProcessingResult:
    """Output of mapping and validating input data against a template."""

    filled_fields: list[FilledField]
    validation: ValidationResult

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
