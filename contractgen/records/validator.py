"""Validates the replacement values entered for a record before it is queued.

Errors make the record invalid; warnings are informational and are reported
alongside a valid result.
"""

import re
from collections.abc import Collection, Iterable, Mapping

from contractgen.fields.catalog import FieldCatalog
from contractgen.fields.validators import is_valid_national_id
from contractgen.records.models import FieldIssue, RecordValidationResult

_PERSIAN_TEXT_RE = re.compile(r"^[\u0600-\u06FF\u200C\u200D\s]+$")
_MOBILE_RE = re.compile(r"^09\d{9}$")
_DATE_RE = re.compile(r"^\d{4}/\d{1,2}/\d{1,2}$")
_AMOUNT_RE = re.compile(r"^[\d,]+$")
_STREET_HINT_RE = re.compile(r"خیابان|کوچه|بلوار|جاده")
_NUMBER_HINT_RE = re.compile(r"پلاک|شماره|\d+")
_NON_DIGIT_RE = re.compile(r"\D")

_MOBILE_OPERATOR_PREFIXES = frozenset(
    {
        "0901", "0902", "0903", "0905",
        "0910", "0911", "0912", "0913", "0914", "0915", "0916", "0917", "0918", "0919",
        "0990", "0991", "0992", "0993", "0994", "0995", "0996", "0997", "0998", "0999",
    }
)
# Leap positions in the 33-year cycle of the solar hijri calendar, e.g. 1399, 1403, 1408.
_LEAP_YEAR_CYCLE_POSITIONS = frozenset({1, 5, 9, 13, 17, 22, 26, 30})
_MONTH_LENGTHS = (31, 31, 31, 31, 31, 31, 30, 30, 30, 30, 30, 29)

_YEAR_MIN = 1300
_YEAR_MAX = 1500
_AMOUNT_MIN = 1000
_AMOUNT_MAX = 999_999_999_999
_AMOUNT_WARN = 1_000_000_000
_MAX_CONTRACT_DAYS = 3650
_GENERIC_MAX_LENGTH = 1000

_NAME_FIELDS = frozenset({"owner_full_name", "owner_father_name"})
_DATE_FIELDS = frozenset({"contract_start_date", "contract_end_date"})


def validate_record(
    selected_fields: Iterable[str],
    new_values: Mapping[str, str],
    catalog: FieldCatalog,
    detected_fields: Collection[str] | None = None,
) -> RecordValidationResult:
    """Check every selected field's new value plus cross-field constraints."""
    selected = list(dict.fromkeys(selected_fields))
    result = RecordValidationResult()

    if not selected:
        result.is_valid = False
        result.message = "Select at least one field to change."
        return result

    for field_id in selected:
        if field_id not in catalog:
            result.errors.append(FieldIssue(field_id, f"Unknown field '{field_id}'."))
            continue
        if detected_fields is not None and field_id not in detected_fields:
            result.warnings.append(
                FieldIssue(field_id, "Field was not detected in the template; it will not change.")
            )
        value = (new_values.get(field_id) or "").strip()
        if not value:
            continue
        error, warnings = _validate_field(field_id, value)
        if error:
            result.errors.append(FieldIssue(field_id, error))
        result.warnings.extend(FieldIssue(field_id, w) for w in warnings)

    _validate_date_range(selected, new_values, result)

    result.is_valid = not result.errors
    result.message = _summary(result, catalog)
    return result


def _summary(result: RecordValidationResult, catalog: FieldCatalog) -> str:
    if result.errors:
        labels = ", ".join(catalog.label(issue.field) for issue in result.errors)
        return f"Invalid fields: {labels}"
    if result.warnings:
        return f"{len(result.warnings)} warning(s)."
    return "All values are valid."


# ----------------------------------------------------------------------
# Per-field rules; each returns (error message or "", warnings)
# ----------------------------------------------------------------------


def _validate_field(field_id: str, value: str) -> tuple[str, list[str]]:
    if field_id in _NAME_FIELDS:
        return _validate_persian_name(value)
    if field_id == "owner_national_id":
        return _validate_national_id(value)
    if field_id == "owner_mobile":
        return _validate_mobile(value)
    if field_id == "owner_address":
        return _validate_address(value)
    if field_id in _DATE_FIELDS:
        return _validate_date(value)
    if field_id == "guarantee_amount":
        return _validate_amount(value)
    if field_id == "owner_id_number":
        return _validate_id_number(value)
    if len(value) > _GENERIC_MAX_LENGTH:
        return f"Text must not exceed {_GENERIC_MAX_LENGTH} characters.", []
    return "", []


def _validate_persian_name(name: str) -> tuple[str, list[str]]:
    if len(name) < 2:
        return "Name must be at least 2 characters.", []
    if len(name) > 50:
        return "Name must not exceed 50 characters.", []
    if not _PERSIAN_TEXT_RE.match(name):
        return "Name must contain Persian letters only.", []
    if "  " in name:
        return "", ["Name contains repeated spaces."]
    return "", []


def _validate_national_id(national_id: str) -> tuple[str, list[str]]:
    cleaned = _NON_DIGIT_RE.sub("", national_id)
    if len(cleaned) != 10:
        return "National ID must be exactly 10 digits.", []
    if len(set(cleaned)) == 1:
        return "National ID cannot repeat a single digit.", []
    if not is_valid_national_id(cleaned):
        return "National ID is not valid.", []
    return "", []


def _validate_mobile(mobile: str) -> tuple[str, list[str]]:
    cleaned = _NON_DIGIT_RE.sub("", mobile)
    if not _MOBILE_RE.match(cleaned):
        return "Mobile number must start with 09 and have 11 digits.", []
    if cleaned[:4] not in _MOBILE_OPERATOR_PREFIXES:
        return "", ["Mobile operator prefix may not be valid."]
    return "", []


def _validate_address(address: str) -> tuple[str, list[str]]:
    if len(address) < 10:
        return "Address must be at least 10 characters.", []
    if len(address) > 200:
        return "Address must not exceed 200 characters.", []
    if not _STREET_HINT_RE.search(address) and not _NUMBER_HINT_RE.search(address):
        return "", ["Address may be incomplete; add a street or plate number."]
    return "", []


def _validate_date(date: str) -> tuple[str, list[str]]:
    if not _DATE_RE.match(date):
        return "Date format is invalid; expected e.g. 1403/01/01.", []
    year, month, day = _split_date(date)
    if not _YEAR_MIN <= year <= _YEAR_MAX:
        return f"Year must be between {_YEAR_MIN} and {_YEAR_MAX}.", []
    if not 1 <= month <= 12:
        return "Month must be between 1 and 12.", []
    if not 1 <= day <= _month_length(year, month):
        return f"Day is not valid for month {month}.", []
    return "", []


def _validate_amount(amount: str) -> tuple[str, list[str]]:
    if not _AMOUNT_RE.match(amount):
        return "Amount may only contain digits and commas.", []
    digits = amount.replace(",", "")
    if not digits:
        return "Amount is not valid.", []
    value = int(digits)
    if value < _AMOUNT_MIN:
        return f"Amount must be at least {_AMOUNT_MIN:,}.", []
    if value > _AMOUNT_MAX:
        return f"Amount must not exceed {_AMOUNT_MAX:,}.", []
    if value > _AMOUNT_WARN:
        return "", ["Amount is unusually large; please double-check it."]
    return "", []


def _validate_id_number(id_number: str) -> tuple[str, list[str]]:
    cleaned = _NON_DIGIT_RE.sub("", id_number)
    if not 1 <= len(cleaned) <= 10:
        return "ID number must have between 1 and 10 digits.", []
    return "", []


# ----------------------------------------------------------------------
# Cross-field rules
# ----------------------------------------------------------------------


def _validate_date_range(
    selected: list[str],
    new_values: Mapping[str, str],
    result: RecordValidationResult,
) -> None:
    if "contract_start_date" not in selected or "contract_end_date" not in selected:
        return
    start = (new_values.get("contract_start_date") or "").strip()
    end = (new_values.get("contract_end_date") or "").strip()
    if not _DATE_RE.match(start) or not _DATE_RE.match(end):
        return

    start_day = _day_number(*_split_date(start))
    end_day = _day_number(*_split_date(end))
    if start_day >= end_day:
        result.errors.append(
            FieldIssue("contract_dates", "Start date must be before end date.")
        )
    elif end_day - start_day > _MAX_CONTRACT_DAYS:
        result.warnings.append(
            FieldIssue("contract_dates", "Contract is longer than ten years; check the dates.")
        )


def _split_date(date: str) -> tuple[int, int, int]:
    year, month, day = (int(part) for part in date.split("/"))
    return year, month, day


def is_leap_year(year: int) -> bool:
    return year % 33 in _LEAP_YEAR_CYCLE_POSITIONS


def _month_length(year: int, month: int) -> int:
    if month == 12 and is_leap_year(year):
        return 30
    return _MONTH_LENGTHS[month - 1]


def _day_number(year: int, month: int, day: int) -> int:
    """Approximate day count since the epoch, good enough to order and diff dates."""
    month = min(max(month, 1), 12)
    return year * 365 + year // 4 + sum(_MONTH_LENGTHS[: month - 1]) + day
