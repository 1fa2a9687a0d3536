import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class FieldKind(str, Enum):
    """Drives field-specific formatting in the value normalizer."""

    TEXT = "text"
    NUMERIC_ID = "numeric_id"
    PHONE = "phone"
    AMOUNT = "amount"
    DATE = "date"


@dataclass(frozen=True)
class FieldDefinition:
    """A recognized field: how to find it in a template and when to trust it."""

    id: str
    label: str
    detection_patterns: tuple[re.Pattern[str], ...]
    accept: Callable[[str], bool]
    table_pattern: re.Pattern[str] | None = None
    kind: FieldKind = FieldKind.TEXT
    max_digits: int | None = None  # numeric identifiers only
