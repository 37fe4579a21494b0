import json
from pathlib import Path

import pytest

from formfill.logging.logger import Log
from formfill.main import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DATA_PATH", "TEMPLATES_DIR", "FORM_FAMILY_PATH", "FORM_FAMILY", "LOG_LEVEL"
    ):
        monkeypatch.delenv(name, raising=False)
    # Fresh handler per test so it writes to the captured stderr.
    monkeypatch.setattr(Log._logger, "handlers", [])


class TestMain:
    def test_prints_analysis_without_data(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("TEMPLATE_ID", "tmpl_w2_2024_v1")
        main()
        document = json.loads(capsys.readouterr().out)
        assert [s["title"] for s in document["sections"]] == [
            "Employee Information",
            "Wage Information",
            "Tax Information",
        ]
        assert document["data_skeleton"]["employee"]["fullName"] == "John Doe"
        assert document["data_skeleton"]["taxes"]["federal"] == 12000

    def test_fills_input_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        data_file = tmp_path / "w2.json"
        data_file.write_text(
            json.dumps(
                {
                    "employee": {"fullName": "Jane Roe", "ssn": "987654321"},
                    "wages": {"total": 52000.4},
                    "taxes": {"federal": 6100},
                }
            ),
            encoding="utf-8",
        )
        monkeypatch.setenv("TEMPLATE_ID", "tmpl_w2_2024_v1")
        monkeypatch.setenv("DATA_PATH", str(data_file))

        main()
        document = json.loads(capsys.readouterr().out)

        assert document["template_id"] == "tmpl_w2_2024_v1"
        assert document["filled_form_id"].startswith("filled_")
        assert document["validation_status"] == "valid"
        assert document["validation_errors"] == []
        display = {f["field_id"]: f["display_value"] for f in document["fields"]}
        assert display["employee_ssn"] == "987-65-4321"
        assert display["wages_tips"] == "$52,000.40"
        assert display["federal_tax_withheld"] == "$6,100.00"

    def test_invalid_input_is_reported(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        data_file = tmp_path / "empty.json"
        data_file.write_text("{}", encoding="utf-8")
        monkeypatch.setenv("DATA_PATH", str(data_file))
        monkeypatch.setenv("TEMPLATE_ID", "tmpl_1040_2024_v1")

        main()
        document = json.loads(capsys.readouterr().out)

        assert document["validation_status"] == "invalid"
        assert len(document["validation_errors"]) == 7
        assert document["validation_errors"][0] == {
            "field_id": "taxpayer_first_name",
            "error": "Required field is missing",
            "data_path": "taxpayer.firstName",
        }

    def test_logs_stay_out_of_json_output(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TEMPLATE_ID", "tmpl_1040_2024_v1")

        main()
        captured = capsys.readouterr()

        assert "sections" in json.loads(captured.out)
        assert "[INFO] Loaded 3 templates and form family individual_income" in captured.err
