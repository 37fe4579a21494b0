from dataclasses import dataclass, field
from typing import Any, Literal

from formfill.analysis.field_types import get_input_type, get_max_length, get_placeholder
from formfill.mapping.values import JSONValue

InputType = Literal["text", "number", "email", "ssn", "state", "zip", "checkbox"]

INPUT_TYPES: frozenset[str] = frozenset(
    {"text", "number", "email", "ssn", "state", "zip", "checkbox"}
)


@dataclass(frozen=True)
class FieldMetadata:
    """Human-facing description of a data path in a form family."""

    label: str
    input_type: InputType
    section: str
    placeholder: str | None = None


@dataclass(frozen=True)
class FormFamilyConfig:
    """Lookup tables for one family of forms.

    field_mappings: data path -> label, input type, section and placeholder.
    section_order: titles of the sections to emit, in order.
    sample_data: data path -> example value for the data skeleton.
    """

    name: str
    field_mappings: dict[str, FieldMetadata] = field(default_factory=dict)
    section_order: list[str] = field(default_factory=list)
    sample_data: dict[str, JSONValue] = field(default_factory=dict)


@dataclass(frozen=True)
class FieldRequirement:
    """One input the caller has to collect to fill a template."""

    path: str
    label: str
    input_type: InputType
    required: bool
    section: str
    max_length: int | None = None
    pattern: str | None = None
    placeholder: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "path": self.path,
            "label": self.label,
            "type": self.input_type,
            "required": self.required,
            "section": self.section,
        }
        if self.max_length is not None:
            out["maxLength"] = self.max_length
        if self.pattern is not None:
            out["pattern"] = self.pattern
        if self.placeholder is not None:
            out["placeholder"] = self.placeholder
        return out

    def input_attributes(self) -> dict[str, Any]:
        """Attributes for an HTML-like input control. Unset ones are omitted."""
        attributes: dict[str, Any] = {"type": get_input_type(self.input_type)}
        max_length = get_max_length(self.input_type, self.max_length)
        if max_length is not None:
            attributes["maxLength"] = max_length
        placeholder = get_placeholder(self.input_type, self.placeholder)
        if placeholder is not None:
            attributes["placeholder"] = placeholder
        return attributes


@dataclass(frozen=True)
class FormSection:
    title: str
    fields: list[FieldRequirement] = field(default_factory=list)


@dataclass(frozen=True)
class FormStructure:
    """Input schema of a template and a starting document for it."""

    sections: list[FormSection]
    data_skeleton: dict[str, JSONValue]

    def to_dict(self) -> dict[str, Any]:
        return {
            "sections": [
                {"title": s.title, "fields": [f.to_dict() for f in s.fields]}
                for s in self.sections
            ],
            "data_skeleton": self.data_skeleton,
        }

    def field_count(self) -> int:
        return sum(len(s.fields) for s in self.sections)
