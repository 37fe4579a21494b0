from datetime import date
from unittest.mock import patch

import pytest

from conftest import make_annotation
from formfill.mapping.formatter import format_display, format_value
from formfill.mapping.models import FormatDegraded, FormatOk
from formfill.templates.models import FormatRules


def _fmt(value: object, field_type: str = "text", **rules: object) -> str:
    annotation = make_annotation(
        field_type=field_type,
        format_rules=FormatRules(**rules) if rules else None,  # type: ignore[arg-type]
    )
    return format_display(value, annotation)


class TestEmptyValues:
    @pytest.mark.parametrize("field_type", ["text", "number", "currency", "ssn", "date", "checkbox"])
    def test_none_and_empty_string_format_to_empty(self, field_type: str) -> None:
        assert _fmt(None, field_type) == ""
        assert _fmt("", field_type) == ""

    def test_empty_value_is_ok_outcome(self) -> None:
        assert format_value(None, make_annotation()) == FormatOk("")


class TestSsn:
    def test_nine_digits_with_pattern(self) -> None:
        assert _fmt("123456789", "ssn", pattern="###-##-####") == "123-45-6789"

    def test_integer_value_is_stringified_first(self) -> None:
        assert _fmt(123456789, "ssn", pattern="###-##-####") == "123-45-6789"

    def test_wrong_length_passes_through(self) -> None:
        assert _fmt("12345", "ssn", pattern="###-##-####") == "12345"

    def test_without_pattern_passes_through(self) -> None:
        assert _fmt("123456789", "ssn") == "123456789"


class TestCurrency:
    def test_us_currency(self) -> None:
        assert _fmt(1234.5, "currency", type="currency") == "$1,234.50"

    def test_large_integer(self) -> None:
        assert _fmt(75000, "currency", type="currency") == "$75,000.00"

    def test_numeric_string(self) -> None:
        assert _fmt("1200", "currency", type="currency") == "$1,200.00"

    def test_negative_amount(self) -> None:
        assert _fmt(-42.1, "currency", type="currency") == "-$42.10"

    def test_rounds_half_up(self) -> None:
        assert _fmt(0.125, "currency", type="currency") == "$0.13"

    def test_unparseable_falls_back(self) -> None:
        assert _fmt("n/a", "currency", type="currency") == "n/a"

    def test_without_currency_subtype_passes_through(self) -> None:
        assert _fmt(1234.5, "currency") == "1234.5"


class TestNumber:
    def test_percentage_default_precision(self) -> None:
        assert _fmt(50, "number", type="percentage") == "50.00%"

    def test_percentage_with_precision(self) -> None:
        assert _fmt(12.345, "number", type="percentage", precision=1) == "12.3%"

    def test_decimal_groups_thousands(self) -> None:
        assert _fmt(1234567.891, "number", type="decimal") == "1,234,567.89"

    def test_decimal_with_precision(self) -> None:
        assert _fmt("3.14159", "number", type="decimal", precision=3) == "3.142"

    def test_decimal_zero_precision(self) -> None:
        assert _fmt(2.5, "number", type="decimal", precision=0) == "3"

    def test_integer_rounds_to_nearest(self) -> None:
        assert _fmt(2.5, "number", type="integer") == "3"
        assert _fmt(2.4, "number", type="integer") == "2"

    def test_integer_rounds_negative_half_up(self) -> None:
        assert _fmt(-2.5, "number", type="integer") == "-2"

    def test_leading_number_in_string_is_parsed(self) -> None:
        assert _fmt("42abc", "number", type="integer") == "42"

    def test_no_subtype_passes_through(self) -> None:
        assert _fmt(12.5, "number") == "12.5"

    def test_unparseable_passes_through(self) -> None:
        assert _fmt("abc", "number", type="decimal") == "abc"

    def test_boolean_is_not_a_number(self) -> None:
        assert _fmt(True, "number", type="integer") == "true"

    def test_invalid_precision_degrades(self) -> None:
        annotation = make_annotation(
            field_type="number", format_rules=FormatRules(type="decimal", precision=-1)
        )
        outcome = format_value(12.5, annotation)
        assert isinstance(outcome, FormatDegraded)
        assert outcome.display == "12.5"


class TestDate:
    def test_us_short_date(self) -> None:
        assert _fmt("2024-01-15", "date", pattern="MM/DD/YYYY") == "1/15/2024"

    def test_iso_date(self) -> None:
        assert _fmt("01/15/2024", "date", pattern="YYYY-MM-DD") == "2024-01-15"

    def test_iso_date_from_timestamp_string_uses_utc(self) -> None:
        assert _fmt("2024-01-15T23:30:00-05:00", "date", pattern="YYYY-MM-DD") == "2024-01-16"

    def test_date_object(self) -> None:
        assert _fmt(date(2024, 3, 5), "date", pattern="MM/DD/YYYY") == "3/5/2024"

    def test_epoch_milliseconds(self) -> None:
        assert _fmt(0, "date", pattern="YYYY-MM-DD") == "1970-01-01"

    def test_unknown_pattern_passes_through(self) -> None:
        assert _fmt("2024-01-15", "date", pattern="DD.MM.YYYY") == "2024-01-15"

    def test_without_pattern_passes_through(self) -> None:
        assert _fmt("2024-01-15", "date") == "2024-01-15"

    def test_unparseable_date_passes_through(self) -> None:
        assert _fmt("not a date", "date", pattern="MM/DD/YYYY") == "not a date"

    def test_month_and_year_only_uses_first_day(self) -> None:
        assert _fmt("March 2024", "date", pattern="MM/DD/YYYY") == "3/1/2024"

    def test_partial_date_does_not_depend_on_today(self) -> None:
        assert _fmt("March 5", "date", pattern="YYYY-MM-DD") == "2001-03-05"


class TestCheckbox:
    @pytest.mark.parametrize("value", [True, "true", "X", "Yes", "1", "✓"])
    def test_checked_values(self, value: object) -> None:
        assert _fmt(value, "checkbox") == "✓"

    @pytest.mark.parametrize("value", [False, "false", "No", "0"])
    def test_unchecked_values(self, value: object) -> None:
        assert _fmt(value, "checkbox") == ""

    @pytest.mark.parametrize("value", ["on", 2, [1]])
    def test_other_truthy_values_are_checked(self, value: object) -> None:
        assert _fmt(value, "checkbox") == "✓"

    def test_other_falsy_values_are_unchecked(self) -> None:
        assert _fmt(0, "checkbox") == ""

    def test_idempotent_on_own_output(self) -> None:
        assert _fmt(_fmt("Yes", "checkbox"), "checkbox") == "✓"
        assert _fmt(_fmt("No", "checkbox"), "checkbox") == ""


class TestText:
    def test_uppercase(self) -> None:
        assert _fmt("John", case="uppercase") == "JOHN"

    def test_lowercase(self) -> None:
        assert _fmt("JOHN", case="lowercase") == "john"

    def test_titlecase(self) -> None:
        assert _fmt("new YORK city", case="titlecase") == "New York City"

    def test_truncates_to_max_length(self) -> None:
        assert _fmt("Alexandria", case="uppercase", max_length=4) == "ALEX"

    def test_no_rules_stringifies(self) -> None:
        assert _fmt(42, "text") == "42"

    def test_unknown_field_type_formats_as_text(self) -> None:
        assert _fmt("abc", "signature", case="uppercase") == "ABC"


class TestFormattingFaults:
    def test_fault_degrades_and_logs_warning(self) -> None:
        annotation = make_annotation(field_id="taxpayer_ssn", field_type="ssn")
        with patch("formfill.mapping.formatter._format_ssn", side_effect=RuntimeError("boom")), \
                patch("formfill.mapping.formatter.Log") as log:
            outcome = format_value("123456789", annotation)
        assert outcome == FormatDegraded(display="123456789", reason="boom")
        log.warning.assert_called_once()
        assert "taxpayer_ssn" in log.warning.call_args[0][0]
