import pytest

from contractgen.fields.catalog import build_default_catalog
from contractgen.records.validator import is_leap_year, validate_record


def _validate(values: dict[str, str], detected: set[str] | None = None):  # type: ignore[no-untyped-def]
    return validate_record(list(values), values, build_default_catalog(), detected)


def _errors(values: dict[str, str]) -> dict[str, str]:
    return {issue.field: issue.message for issue in _validate(values).errors}


def _warnings(values: dict[str, str]) -> dict[str, str]:
    return {issue.field: issue.message for issue in _validate(values).warnings}


class TestRecordRules:
    def test_requires_a_selection(self) -> None:
        result = validate_record([], {}, build_default_catalog())
        assert not result.is_valid
        assert result.message == "Select at least one field to change."

    def test_all_valid(self) -> None:
        result = _validate(
            {
                "owner_full_name": "حسن کریمی",
                "owner_national_id": "0499370899",
                "owner_mobile": "09121234567",
            }
        )
        assert result.is_valid
        assert result.errors == []
        assert result.message == "All values are valid."

    def test_unknown_field(self) -> None:
        assert "nickname" in _errors({"nickname": "x"})

    def test_empty_value_is_skipped(self) -> None:
        assert _validate({"owner_full_name": "  "}).is_valid

    def test_undetected_field_warns(self) -> None:
        result = _validate({"owner_full_name": "حسن کریمی"}, detected={"owner_mobile"})
        assert result.is_valid
        assert result.warnings[0].field == "owner_full_name"
        assert result.message == "1 warning(s)."

    def test_message_lists_invalid_labels(self) -> None:
        result = _validate({"owner_father_name": "x"})
        assert result.message == "Invalid fields: نام پدر"


class TestNames:
    def test_too_short(self) -> None:
        assert "at least 2" in _errors({"owner_full_name": "ح"})["owner_full_name"]

    def test_too_long(self) -> None:
        assert "50" in _errors({"owner_full_name": "ح" * 51})["owner_full_name"]

    def test_latin_letters_rejected(self) -> None:
        assert "Persian" in _errors({"owner_father_name": "Ali"})["owner_father_name"]

    def test_double_space_warns(self) -> None:
        assert "owner_full_name" in _warnings({"owner_full_name": "حسن  کریمی"})


class TestNationalId:
    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("12345", "exactly 10 digits"),
            ("1111111111", "single digit"),
            ("0499370898", "not valid"),
            ("1234567891", "not valid"),
        ],
    )
    def test_rejected(self, value: str, message: str) -> None:
        assert message in _errors({"owner_national_id": value})["owner_national_id"]


class TestMobile:
    def test_wrong_prefix(self) -> None:
        assert "owner_mobile" in _errors({"owner_mobile": "02188776655"})

    def test_unknown_operator_warns(self) -> None:
        assert "owner_mobile" in _warnings({"owner_mobile": "09401234567"})

    def test_known_operator(self) -> None:
        assert _warnings({"owner_mobile": "09121234567"}) == {}


class TestAddress:
    def test_too_short(self) -> None:
        assert "owner_address" in _errors({"owner_address": "تهران"})

    def test_missing_street_and_number_warns(self) -> None:
        assert "owner_address" in _warnings({"owner_address": "تهران منطقه شمال شرق"})

    def test_complete_address(self) -> None:
        assert _warnings({"owner_address": "تهران، خیابان آزادی، پلاک 12"}) == {}


class TestDates:
    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("1403-01-01", "format"),
            ("1299/01/01", "Year"),
            ("1403/13/01", "Month"),
            ("1403/07/31", "Day"),
            ("1404/12/30", "Day"),
        ],
    )
    def test_rejected(self, value: str, message: str) -> None:
        assert message in _errors({"contract_start_date": value})["contract_start_date"]

    def test_leap_year_allows_thirtieth_of_last_month(self) -> None:
        assert _errors({"contract_end_date": "1403/12/30"}) == {}

    @pytest.mark.parametrize(
        ("year", "leap"),
        [(1395, True), (1399, True), (1403, True), (1404, False), (1407, False), (1408, True)],
    )
    def test_is_leap_year(self, year: int, leap: bool) -> None:
        assert is_leap_year(year) is leap

    def test_start_must_precede_end(self) -> None:
        errors = _errors({"contract_start_date": "1404/01/01", "contract_end_date": "1403/01/01"})
        assert "contract_dates" in errors

    def test_same_day_is_rejected(self) -> None:
        errors = _errors({"contract_start_date": "1403/01/01", "contract_end_date": "1403/01/01"})
        assert "contract_dates" in errors

    def test_long_contract_warns(self) -> None:
        warnings = _warnings(
            {"contract_start_date": "1403/01/01", "contract_end_date": "1415/01/01"}
        )
        assert "contract_dates" in warnings

    def test_one_year_contract(self) -> None:
        result = _validate({"contract_start_date": "1403/01/01", "contract_end_date": "1404/01/01"})
        assert result.is_valid
        assert result.warnings == []


class TestAmount:
    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("12a", "digits and commas"),
            ("500", "at least"),
            ("1,000,000,000,000", "must not exceed"),
        ],
    )
    def test_rejected(self, value: str, message: str) -> None:
        assert message in _errors({"guarantee_amount": value})["guarantee_amount"]

    def test_large_amount_warns(self) -> None:
        assert "guarantee_amount" in _warnings({"guarantee_amount": "2,000,000,000"})

    def test_typical_amount(self) -> None:
        assert _validate({"guarantee_amount": "50,000,000"}).warnings == []


class TestIdNumber:
    def test_too_long(self) -> None:
        assert "owner_id_number" in _errors({"owner_id_number": "12345678901"})

    def test_valid(self) -> None:
        assert _validate({"owner_id_number": "1234"}).is_valid
