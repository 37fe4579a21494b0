import json

from formfill.config.settings import Settings
from formfill.logging.logger import Log
from formfill.service.form_filler import build_service


def main() -> None:
    """Entry point: load settings -> build service -> fill or analyze one template."""
    settings = Settings()
    Log.configure(settings.log_level)
    service = build_service(settings)

    if settings.data_path is None:
        structure = service.analyze(settings.template_id)
        print(json.dumps(structure.to_dict(), indent=2, ensure_ascii=False))
        return

    input_data = json.loads(settings.data_path.read_text(encoding="utf-8"))
    outcome = service.fill(settings.template_id, input_data)
    filled_form = outcome.filled_form
    print(
        json.dumps(
            {
                "filled_form_id": filled_form.filled_form_id,
                "template_id": filled_form.template_id,
                "fields": [f.to_dict() for f in filled_form.filled_data],
                "validation_status": filled_form.validation_status,
                "validation_errors": [e.to_dict() for e in outcome.validation_errors],
                "created_at": filled_form.created_at,
            },
            indent=2,
            ensure_ascii=False,
        )
    )


if __name__ == "__main__":
    main()
