import json
from pathlib import Path
from typing import Any

from formfill.analysis.exceptions import FormFamilyLoadError, UnknownFormFamilyError
from formfill.analysis.models import INPUT_TYPES, FieldMetadata, FormFamilyConfig

_BUNDLED_FAMILY_DIR = Path(__file__).parent / "data"

DEFAULT_FAMILY = "individual_income"


def bundled_families() -> list[str]:
    """Names of the form families shipped with the package."""
    return sorted(p.stem for p in _BUNDLED_FAMILY_DIR.glob("*.json"))


def load_form_family(name: str | None = None, path: Path | None = None) -> FormFamilyConfig:
    """Load a form-family configuration.

    Args:
        name: Bundled family name. Defaults to individual_income.
        path: Custom family JSON file. Takes precedence over *name*.

    Raises:
        UnknownFormFamilyError: if no bundled family has that name.
        FormFamilyLoadError: if the file cannot be read or has the wrong shape.
    """
    if path is None:
        family = name or DEFAULT_FAMILY
        path = _BUNDLED_FAMILY_DIR / f"{family}.json"
        if not path.is_file():
            raise UnknownFormFamilyError(
                f"Unknown form family '{family}'. Choose from: {bundled_families()}"
            )
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FormFamilyLoadError(f"Failed to load form family: {exc}") from exc
    return build_form_family(document, default_name=path.stem)


def build_form_family(document: Any, default_name: str = "") -> FormFamilyConfig:
    """Build a FormFamilyConfig from its JSON object.

    Raises:
        FormFamilyLoadError: on any structural problem.
    """
    if not isinstance(document, dict):
        raise FormFamilyLoadError("Form family must be an object")
    section_order = document.get("section_order", [])
    if not isinstance(section_order, list) or not all(
        isinstance(s, str) for s in section_order
    ):
        raise FormFamilyLoadError("'section_order' must be a list of strings")
    sample_data = document.get("sample_data", {})
    if not isinstance(sample_data, dict):
        raise FormFamilyLoadError("'sample_data' must be an object")
    raw_mappings = document.get("field_mappings", {})
    if not isinstance(raw_mappings, dict):
        raise FormFamilyLoadError("'field_mappings' must be an object")
    return FormFamilyConfig(
        name=document.get("name") or default_name,
        field_mappings={p: _build_metadata(p, raw) for p, raw in raw_mappings.items()},
        section_order=list(section_order),
        sample_data=dict(sample_data),
    )


def _build_metadata(path: str, raw: Any) -> FieldMetadata:
    if not isinstance(raw, dict):
        raise FormFamilyLoadError(f"Mapping for '{path}' must be an object")
    label = raw.get("label")
    section = raw.get("section")
    if not isinstance(label, str) or not isinstance(section, str):
        raise FormFamilyLoadError(f"Mapping for '{path}': 'label' and 'section' must be strings")
    input_type = raw.get("input_type", "text")
    if input_type not in INPUT_TYPES:
        raise FormFamilyLoadError(
            f"Mapping for '{path}': 'input_type' must be one of "
            f"{sorted(INPUT_TYPES)}, got {input_type!r}"
        )
    placeholder = raw.get("placeholder")
    if placeholder is not None and not isinstance(placeholder, str):
        raise FormFamilyLoadError(f"Mapping for '{path}': 'placeholder' must be a string")
    return FieldMetadata(
        label=label,
        input_type=input_type,
        section=section,
        placeholder=placeholder,
    )
