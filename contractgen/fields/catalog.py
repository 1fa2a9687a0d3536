"""Registry of the fields the extractor knows how to detect.

The catalog is built once at startup and handed to every component that needs
it; nothing in it is mutated afterwards.
"""

import re
from collections.abc import Iterator

from contractgen.fields.models import FieldDefinition, FieldKind
from contractgen.fields.validators import (
    is_valid_amount,
    is_valid_date,
    is_valid_id_number,
    is_valid_national_id,
    is_valid_phone,
    length_between,
)

# Phrases that introduce a field in running text. A free-text capture ends
# where the next one begins.
FIELD_LABEL_PHRASES: tuple[str, ...] = (
    "نام و نام خانوادگی",
    "نام مالک",
    "نام کامل",
    "نام پدر",
    "فرزند",
    "کد ملی",
    "شماره ملی",
    "شماره شناسنامه",
    "ش.ش",
    "شماره تلفن همراه",
    "موبایل",
    "تلفن",
    "نشانی اقامتگاه",
    "آدرس",
    "محل سکونت",
    "از تاریخ",
    "مبلغ",
)

_STOP_LABELS = "|".join(re.escape(phrase) for phrase in FIELD_LABEL_PHRASES)
_NO_LABEL = rf"(?!\s*(?:{_STOP_LABELS}))"
_NAME_END = rf"(?=\s*(?:{_STOP_LABELS})|\s*[،؛,.:()\d]|$)"
_ADDRESS_END = rf"(?=\s*(?:{_STOP_LABELS})|$)"
# Labels are often written with the party they belong to, e.g. "نام پدر مالک:".
_OWNER_SUFFIX = r"(?:\s*مالک(?!\w))?"


def table_aware_pattern(label: str) -> re.Pattern[str]:
    """Match the table cell right after the cell whose text is *label*."""
    return re.compile(
        rf"<w:t>{re.escape(label)}</w:t>.*?</w:tc>.*?<w:tc.*?>(.*?)</w:tc>",
        re.IGNORECASE,
    )


def _name_pattern(label: str) -> re.Pattern[str]:
    return re.compile(
        rf"{re.escape(label)}{_OWNER_SUFFIX}[:\s]*{_NO_LABEL}(.+?){_NAME_END}", re.IGNORECASE
    )


def _address_pattern(label: str) -> re.Pattern[str]:
    return re.compile(
        rf"{re.escape(label)}{_OWNER_SUFFIX}[:\s]*{_NO_LABEL}(.+?){_ADDRESS_END}", re.IGNORECASE
    )


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


class FieldCatalog:
    """Ordered, immutable collection of field definitions."""

    def __init__(self, definitions: list[FieldDefinition] | tuple[FieldDefinition, ...]) -> None:
        index: dict[str, FieldDefinition] = {}
        for definition in definitions:
            if definition.id in index:
                raise ValueError(f"Duplicate field id in catalog: {definition.id}")
            index[definition.id] = definition
        self._definitions = tuple(definitions)
        self._index = index

    def definitions(self) -> tuple[FieldDefinition, ...]:
        return self._definitions

    def get(self, field_id: str) -> FieldDefinition | None:
        return self._index.get(field_id)

    def ids(self) -> tuple[str, ...]:
        return tuple(d.id for d in self._definitions)

    def label(self, field_id: str) -> str:
        definition = self._index.get(field_id)
        return definition.label if definition is not None else field_id

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._index

    def __iter__(self) -> Iterator[FieldDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)


def build_default_catalog() -> FieldCatalog:
    """Build the catalog of lease-contract owner fields."""
    return FieldCatalog(
        [
            FieldDefinition(
                id="owner_full_name",
                label="نام و نام خانوادگی مالک",
                detection_patterns=(
                    _name_pattern("نام و نام خانوادگی"),
                    _name_pattern("نام مالک"),
                    _name_pattern("نام کامل"),
                ),
                table_pattern=table_aware_pattern("نام و نام خانوادگی:"),
                accept=length_between(2, 50),
            ),
            FieldDefinition(
                id="owner_father_name",
                label="نام پدر",
                detection_patterns=(
                    _name_pattern("نام پدر"),
                    _name_pattern("فرزند"),
                ),
                table_pattern=table_aware_pattern("نام پدر:"),
                accept=length_between(2, 30),
            ),
            FieldDefinition(
                id="owner_national_id",
                label="کد ملی مالک",
                detection_patterns=_compile(
                    r"کد ملی[:\s]*([0-9]{8,10})",
                    r"شماره ملی[:\s]*([0-9]{8,10})",
                ),
                table_pattern=table_aware_pattern("کد ملی:"),
                accept=is_valid_national_id,
                kind=FieldKind.NUMERIC_ID,
                max_digits=10,
            ),
            FieldDefinition(
                id="owner_id_number",
                label="شماره شناسنامه",
                detection_patterns=_compile(
                    r"شماره شناسنامه[:\s]*([0-9]+)",
                    r"ش\.ش[:\s]*([0-9]+)",
                ),
                table_pattern=table_aware_pattern("شماره شناسنامه:"),
                accept=is_valid_id_number,
                kind=FieldKind.NUMERIC_ID,
                max_digits=10,
            ),
            FieldDefinition(
                id="owner_mobile",
                label="شماره موبایل",
                detection_patterns=_compile(
                    r"شماره تلفن همراه[:\s]*([0-9\-\s+()]+)",
                    r"موبایل[:\s]*([0-9\-\s+()]+)",
                    r"تلفن[:\s]*([0-9\-\s+()]+)",
                ),
                table_pattern=table_aware_pattern("شماره تلفن همراه:"),
                accept=is_valid_phone,
                kind=FieldKind.PHONE,
            ),
            FieldDefinition(
                id="owner_address",
                label="آدرس مالک",
                detection_patterns=(
                    _address_pattern("نشانی اقامتگاه"),
                    _address_pattern("آدرس"),
                    _address_pattern("محل سکونت"),
                ),
                table_pattern=table_aware_pattern("نشانی اقامتگاه:"),
                accept=length_between(5, 200),
            ),
            FieldDefinition(
                id="contract_start_date",
                label="تاریخ شروع قرارداد",
                detection_patterns=_compile(
                    r"از\s*تاریخ\s*([0-9/\-\s]+)",
                    r"شروع\s*از[:\s]*([0-9/\-\s]+)",
                ),
                accept=is_valid_date,
                kind=FieldKind.DATE,
            ),
            FieldDefinition(
                id="contract_end_date",
                label="تاریخ پایان قرارداد",
                detection_patterns=_compile(
                    r"تا\s*([0-9/\-\s]+)\s*معتبر است",
                    r"پایان[:\s]*([0-9/\-\s]+)",
                ),
                accept=is_valid_date,
                kind=FieldKind.DATE,
            ),
            FieldDefinition(
                id="guarantee_amount",
                label="مبلغ سفته",
                detection_patterns=_compile(
                    r"یک عدد سفته به مبلغ\s*([0-9,\s]+)\s*ریال",
                    r"مبلغ سفته[:\s]*([0-9,\s]+)",
                    r"مبلغ ضمانت[:\s]*([0-9,\s]+)",
                ),
                accept=is_valid_amount,
                kind=FieldKind.AMOUNT,
            ),
        ]
    )
