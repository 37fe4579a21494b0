import json
from pathlib import Path

from formfill.templates.exceptions import TemplateLoadError
from formfill.templates.models import Template
from formfill.templates.parser import parse_template

_BUNDLED_TEMPLATE_DIR = Path(__file__).parent / "data"


def load_template(path: Path) -> Template:
    """Load a single template from a JSON file.

    Raises:
        TemplateLoadError: if the file cannot be read or is not valid JSON.
        TemplateParseError: if the JSON is not a template.
    """
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise TemplateLoadError(f"Failed to load template {path.name}: {exc}") from exc
    return parse_template(document)


def load_templates_dir(directory: Path) -> list[Template]:
    """Load every *.json template in a directory, sorted by file name."""
    if not directory.is_dir():
        raise TemplateLoadError(f"Template directory not found: {directory}")
    return [load_template(p) for p in sorted(directory.glob("*.json"))]


def bundled_templates() -> list[Template]:
    """Templates shipped with the package."""
    return load_templates_dir(_BUNDLED_TEMPLATE_DIR)
