"""Acceptance predicates applied to normalized field values.

Each predicate takes the normalized value and returns ``True`` when the value
is plausible enough to be treated as a detected field. Predicates never raise.
"""

import re
from collections.abc import Callable

_DIGITS_RE = re.compile(r"\D")
_SAME_DIGIT_RE = re.compile(r"^(\d)\1{9}$")
_PLACEHOLDER_NATIONAL_ID_RE = re.compile(r"^123456789\d$")
_PHONE_RE = re.compile(r"^(09\d{9}|0\d{10})$")
_DATE_RE = re.compile(r"^\d{4}/\d{1,2}/\d{1,2}$")
_ID_NUMBER_RE = re.compile(r"^\d{1,10}$")


def national_id_checksum_ok(digits: str) -> bool:
    """Check the mod-11 check digit of a 10-digit national identifier."""
    total = sum(int(digits[i]) * (10 - i) for i in range(9))
    remainder = total % 11
    check_digit = int(digits[9])
    if remainder < 2:
        return check_digit == remainder
    return check_digit == 11 - remainder


def is_valid_national_id(value: str) -> bool:
    if not value:
        return False
    cleaned = _DIGITS_RE.sub("", value)
    if len(cleaned) != 10:
        return False
    if _SAME_DIGIT_RE.match(cleaned):
        return False
    # "1234567890"-style form placeholders are never real identifiers
    if _PLACEHOLDER_NATIONAL_ID_RE.match(cleaned):
        return False
    return national_id_checksum_ok(cleaned)


def is_valid_phone(value: str) -> bool:
    if not value:
        return False
    return bool(_PHONE_RE.match(_DIGITS_RE.sub("", value)))


def is_valid_date(value: str) -> bool:
    if not value:
        return False
    return bool(_DATE_RE.match(value.strip()))


def is_valid_amount(value: str) -> bool:
    if not value:
        return False
    cleaned = re.sub(r"[,\s]", "", value)
    return cleaned.isdigit() and int(cleaned) > 0


def is_valid_id_number(value: str) -> bool:
    return bool(_ID_NUMBER_RE.match(value))


def length_between(min_length: int, max_length: int) -> Callable[[str], bool]:
    """Build a predicate accepting strings whose length is within bounds."""

    def _accept(value: str) -> bool:
        return min_length <= len(value) <= max_length

    return _accept
