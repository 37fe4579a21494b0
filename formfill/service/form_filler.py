from dataclasses import dataclass, field

from formfill.analysis.analyzer import FormStructureAnalyzer
from formfill.analysis.families import load_form_family
from formfill.analysis.models import FormFamilyConfig, FormStructure
from formfill.config.settings import Settings
from formfill.logging.logger import Log
from formfill.mapping.models import ValidationError
from formfill.mapping.processor import TemplateProcessor
from formfill.mapping.values import JSONValue
from formfill.storage.base import BaseFormStorage
from formfill.storage.memory import InMemoryFormStorage, utc_timestamp
from formfill.storage.models import FilledForm
from formfill.templates.loader import bundled_templates, load_templates_dir


@dataclass(frozen=True)
class FillOutcome:
    """A stored filled form together with the validation errors that decided its status."""

    filled_form: FilledForm
    validation_errors: list[ValidationError] = field(default_factory=list)


class FormFillService:
    """Fills stored templates with input data and keeps the results.

    Flow: fetch template -> map and validate -> store filled form.
    """

    def __init__(
        self,
        storage: BaseFormStorage,
        family_config: FormFamilyConfig,
        processor: TemplateProcessor | None = None,
    ) -> None:
        self._storage = storage
        self._analyzer = FormStructureAnalyzer(family_config)
        self._processor = processor if processor is not None else TemplateProcessor()

    @property
    def storage(self) -> BaseFormStorage:
        return self._storage

    def fill(
        self,
        template_id: str,
        input_data: JSONValue,
        user_id: str | None = None,
    ) -> FillOutcome:
        """Fill a template. Invalid data still yields a stored draft.

        Raises:
            TemplateNotFoundError: if the template id is unknown.
        """
        template = self._storage.get_template(template_id)
        result = self._processor.process(input_data, template)
        valid = result.validation.valid

        filled_form = self._storage.create_filled_form(
            FilledForm(
                template_id=template_id,
                input_data=input_data,
                filled_data=result.filled_fields,
                status="completed" if valid else "draft",
                validation_status="valid" if valid else "invalid",
                completed_at=utc_timestamp() if valid else None,
                user_id=user_id,
            )
        )
        Log.info(
            f"Filled template {template_id} as {filled_form.filled_form_id}: "
            f"{filled_form.validation_status}"
        )
        return FillOutcome(filled_form=filled_form, validation_errors=result.validation.errors)

    def analyze(self, template_id: str) -> FormStructure:
        """Input schema of a stored template.

        Raises:
            TemplateNotFoundError: if the template id is unknown.
        """
        return self._analyzer.analyze(self._storage.get_template(template_id))


def build_service(settings: Settings) -> FormFillService:
    """Build a FormFillService with seeded storage and the configured form family."""
    templates = bundled_templates()
    if settings.templates_dir is not None:
        templates.extend(load_templates_dir(settings.templates_dir))
    storage = InMemoryFormStorage(templates)
    family_config = load_form_family(settings.form_family, settings.form_family_path)
    Log.info(
        f"Loaded {len(templates)} templates and form family {family_config.name}"
    )
    return FormFillService(storage=storage, family_config=family_config)
