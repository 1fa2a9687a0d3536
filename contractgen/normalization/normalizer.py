"""Per-field cleanup of raw pattern captures.

Cleanup runs before the acceptance predicate, so it never judges a value; it
only returns the best-effort cleaned text.
"""

import re

from contractgen.fields.catalog import FieldCatalog
from contractgen.fields.models import FieldKind
from contractgen.normalization.base import BaseValueNormalizer

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_SLASH_RE = re.compile(r"\s*/\s*")
_EDGE_SEPARATORS_RE = re.compile(r"^[:\-\s]+|[:\-\s]+$")
_NON_DIGIT_RE = re.compile(r"\D")
_DATE_SEPARATOR_RE = re.compile(r"[\-.]")
_THOUSANDS_RE = re.compile(r"\B(?=(\d{3})+(?!\d))")


def clean_capture(value: str) -> str:
    """Strip markup remnants, collapse whitespace and trim separators."""
    if not value:
        return ""
    cleaned = _TAG_RE.sub(" ", value)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    cleaned = _SLASH_RE.sub("/", cleaned)
    cleaned = cleaned.strip()
    return _EDGE_SEPARATORS_RE.sub("", cleaned)


def digits_only(value: str) -> str:
    return _NON_DIGIT_RE.sub("", value)


def group_thousands(value: str) -> str:
    """Keep digits and re-insert a comma every three digits from the right."""
    return _THOUSANDS_RE.sub(",", digits_only(value))


def canonical_date(value: str) -> str:
    return _DATE_SEPARATOR_RE.sub("/", value.strip())


class ValueNormalizer(BaseValueNormalizer):
    """Cleans raw captures according to the kind of field they belong to."""

    def __init__(self, catalog: FieldCatalog) -> None:
        self._catalog = catalog

    def normalize(self, field_id: str, raw_value: str) -> str:
        cleaned = clean_capture(raw_value)
        if not cleaned:
            return ""
        definition = self._catalog.get(field_id)
        if definition is None:
            return cleaned

        if definition.kind is FieldKind.NUMERIC_ID:
            digits = digits_only(cleaned)
            if definition.max_digits is not None:
                digits = digits[: definition.max_digits]
            return digits
        if definition.kind is FieldKind.PHONE:
            return digits_only(cleaned)
        if definition.kind is FieldKind.AMOUNT:
            return group_thousands(cleaned)
        if definition.kind is FieldKind.DATE:
            return canonical_date(cleaned)
        return _WHITESPACE_RE.sub(" ", cleaned).strip()
