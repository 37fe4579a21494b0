"""Derives an input schema and a starting data document from a template."""

import copy

from formfill.analysis.models import (
    FieldRequirement,
    FormFamilyConfig,
    FormSection,
    FormStructure,
)
from formfill.logging.logger import Log
from formfill.mapping.resolver import set_path
from formfill.mapping.values import JSONValue, is_truthy
from formfill.templates.models import Annotation, Template

OTHER_SECTION = "Other Information"


class FormStructureAnalyzer:
    """Groups the data paths of a template into labeled input sections.

    Labels, input types, sections and sample values come from the injected
    form-family configuration. Paths missing from it get a label derived
    from their last segment and land in the "Other Information" section.
    """

    def __init__(self, config: FormFamilyConfig) -> None:
        self._config = config

    def analyze(self, template: Template) -> FormStructure:
        requirements = self._collect_requirements(template)
        sections = self._group_sections(requirements)
        skeleton = self._build_skeleton(requirements)
        Log.debug(
            f"Analyzed template {template.template_id} with family {self._config.name}: "
            f"{len(requirements)} unique paths, {len(sections)} sections"
        )
        return FormStructure(sections=sections, data_skeleton=skeleton)

    def _collect_requirements(self, template: Template) -> list[FieldRequirement]:
        seen: set[str] = set()
        requirements: list[FieldRequirement] = []
        for annotation in template.annotations:
            if not annotation.data_path or annotation.data_path in seen:
                continue
            seen.add(annotation.data_path)
            requirements.append(self._build_requirement(annotation))
        return requirements

    def _build_requirement(self, annotation: Annotation) -> FieldRequirement:
        validation = annotation.validation_rules
        required = bool(validation and validation.required)
        pattern = validation.pattern if validation else None
        validation_max = validation.max_length if validation else None

        metadata = self._config.field_mappings.get(annotation.data_path)
        if metadata is not None:
            format_max = annotation.format_rules.max_length if annotation.format_rules else None
            return FieldRequirement(
                path=annotation.data_path,
                label=metadata.label,
                input_type=metadata.input_type,
                required=required,
                section=metadata.section,
                max_length=validation_max or format_max,
                pattern=pattern,
                placeholder=metadata.placeholder,
            )

        field_name = annotation.data_path.split(".")[-1]
        return FieldRequirement(
            path=annotation.data_path,
            label=field_name[:1].upper() + field_name[1:],
            input_type="number" if annotation.field_type == "currency" else "text",
            required=required,
            section=OTHER_SECTION,
            max_length=validation_max,
            pattern=pattern,
        )

    def _group_sections(self, requirements: list[FieldRequirement]) -> list[FormSection]:
        by_section: dict[str, list[FieldRequirement]] = {}
        for requirement in requirements:
            by_section.setdefault(requirement.section, []).append(requirement)

        # Sections missing from section_order are not emitted.
        sections: list[FormSection] = []
        for title in self._config.section_order:
            fields = by_section.get(title)
            if fields:
                ordered = sorted(fields, key=lambda f: (f.label.casefold(), f.label))
                sections.append(FormSection(title=title, fields=ordered))
        return sections

    def _build_skeleton(self, requirements: list[FieldRequirement]) -> dict[str, JSONValue]:
        skeleton: JSONValue = {}
        for requirement in requirements:
            sample = self._config.sample_data.get(requirement.path)
            if is_truthy(sample):
                value = copy.deepcopy(sample)
            else:
                value = 0 if requirement.input_type == "number" else ""
            skeleton = set_path(skeleton, requirement.path, value)
        return skeleton  # type: ignore[return-value]


def analyze_template(template: Template, config: FormFamilyConfig) -> FormStructure:
    """Analyze *template* against the lookup tables in *config*."""
    return FormStructureAnalyzer(config).analyze(template)
