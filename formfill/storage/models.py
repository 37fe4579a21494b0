from dataclasses import dataclass, field
from typing import Literal

from formfill.mapping.models import FilledField
from formfill.mapping.values import JSONValue

FormStatus = Literal["draft", "completed", "submitted"]
ValidationStatus = Literal["valid", "invalid", "pending"]


@dataclass(frozen=True)
class FilledForm:
    """A stored result of filling a template with input data."""

    template_id: str
    input_data: JSONValue
    filled_data: list[FilledField] = field(default_factory=list)
    status: FormStatus = "draft"
    validation_status: ValidationStatus = "pending"
    filled_form_id: str = ""
    created_at: str = ""
    completed_at: str | None = None
    user_id: str | None = None
