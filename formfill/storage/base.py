from abc import ABC, abstractmethod
from typing import Any

from formfill.storage.models import FilledForm
from formfill.templates.models import Template


class BaseFormStorage(ABC):
    """Contract for template and filled-form stores."""

    @abstractmethod
    def create_template(self, template: Template) -> Template:
        """Store a new template under a generated id and return it.

        Raises:
            DuplicateTemplateError: if the generated id is already taken.
        """

    @abstractmethod
    def add_template(self, template: Template) -> Template:
        """Store a template under its own id, replacing any previous one."""

    @abstractmethod
    def get_template(self, template_id: str) -> Template:
        """Raises TemplateNotFoundError if the id is unknown."""

    @abstractmethod
    def list_templates(self) -> list[Template]:
        ...

    @abstractmethod
    def templates_by_type(self, form_type: str) -> list[Template]:
        """Templates whose form type matches, ignoring case."""

    @abstractmethod
    def create_filled_form(self, filled_form: FilledForm) -> FilledForm:
        """Store a filled form under a generated id and return it."""

    @abstractmethod
    def get_filled_form(self, filled_form_id: str) -> FilledForm:
        """Raises FilledFormNotFoundError if the id is unknown."""

    @abstractmethod
    def list_filled_forms(self) -> list[FilledForm]:
        ...

    @abstractmethod
    def update_filled_form(self, filled_form_id: str, **changes: Any) -> FilledForm:
        """Raises FilledFormNotFoundError if the id is unknown."""

    @abstractmethod
    def stats(self) -> dict[str, int]:
        ...

    @abstractmethod
    def clear_filled_forms(self) -> None:
        ...
