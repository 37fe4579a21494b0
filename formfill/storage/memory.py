import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from formfill.storage.base import BaseFormStorage
from formfill.storage.exceptions import (
    DuplicateTemplateError,
    FilledFormNotFoundError,
    TemplateNotFoundError,
)
from formfill.storage.models import FilledForm
from formfill.templates.models import Template


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def template_id_for(template: Template) -> str:
    """Id derived from form type, tax year and version: tmpl_1040_2024_v1_0_0."""
    version = template.version.replace(".", "_")
    return f"tmpl_{template.form_type.lower()}_{template.tax_year}_v{version}"


class InMemoryFormStorage(BaseFormStorage):
    """Process-wide store of templates and filled forms, kept in dicts."""

    def __init__(self, templates: list[Template] | None = None) -> None:
        self._lock = threading.Lock()
        self._templates: dict[str, Template] = {}
        self._filled_forms: dict[str, FilledForm] = {}
        for template in templates or []:
            self.add_template(template)

    def create_template(self, template: Template) -> Template:
        template_id = template_id_for(template)
        now = utc_timestamp()
        stored = replace(template, template_id=template_id, created_at=now, updated_at=now)
        with self._lock:
            if template_id in self._templates:
                raise DuplicateTemplateError(f"Template {template_id} already exists")
            self._templates[template_id] = stored
        return stored

    def add_template(self, template: Template) -> Template:
        with self._lock:
            self._templates[template.template_id] = template
        return template

    def get_template(self, template_id: str) -> Template:
        with self._lock:
            template = self._templates.get(template_id)
        if template is None:
            raise TemplateNotFoundError(f"Template {template_id} not found")
        return template

    def list_templates(self) -> list[Template]:
        with self._lock:
            return list(self._templates.values())

    def templates_by_type(self, form_type: str) -> list[Template]:
        wanted = form_type.lower()
        return [t for t in self.list_templates() if t.form_type.lower() == wanted]

    def create_filled_form(self, filled_form: FilledForm) -> FilledForm:
        stored = replace(
            filled_form,
            filled_form_id=f"filled_{uuid.uuid4()}",
            created_at=utc_timestamp(),
        )
        with self._lock:
            self._filled_forms[stored.filled_form_id] = stored
        return stored

    def get_filled_form(self, filled_form_id: str) -> FilledForm:
        with self._lock:
            filled_form = self._filled_forms.get(filled_form_id)
        if filled_form is None:
            raise FilledFormNotFoundError(f"Filled form {filled_form_id} not found")
        return filled_form

    def list_filled_forms(self) -> list[FilledForm]:
        with self._lock:
            return list(self._filled_forms.values())

    def update_filled_form(self, filled_form_id: str, **changes: Any) -> FilledForm:
        with self._lock:
            existing = self._filled_forms.get(filled_form_id)
            if existing is None:
                raise FilledFormNotFoundError(f"Filled form {filled_form_id} not found")
            updated = replace(existing, **changes)
            self._filled_forms[filled_form_id] = updated
        return updated

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "templates": len(self._templates),
                "filled_forms": len(self._filled_forms),
            }

    def clear_filled_forms(self) -> None:
        with self._lock:
            self._filled_forms.clear()
