"""Archive entry and download names derived from record values.

Both builders are pure: the same values and date always give the same name.
"""

import re
from collections.abc import Mapping
from datetime import date

DEFAULT_PREFIX = "قرارداد"
DEFAULT_FALLBACK_NAME = "نامشخص"
DEFAULT_NAME_FIELD = "owner_full_name"
DEFAULT_MAX_LENGTH = 30
ARCHIVE_PREFIX = "قراردادهای_ساخته_شده"

# ASCII word characters, whitespace, ZWNJ/ZWJ and the Arabic-script blocks are kept.
_DISALLOWED_RE = re.compile(
    r"[^\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF\u200C\u200D\uFB50-\uFDFF\uFE70-\uFEFFA-Za-z0-9_\s]"
)
_WHITESPACE_RE = re.compile(r"\s+")


def date_stamp(day: date) -> str:
    return day.strftime("%Y%m%d")


def sanitize_name(value: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Strip unsafe characters, join words with underscores and cap the length.

    Every whitespace run becomes an underscore, including leading and trailing ones.
    """
    cleaned = _DISALLOWED_RE.sub("", value)
    cleaned = _WHITESPACE_RE.sub("_", cleaned)
    return cleaned[:max_length]


def build_document_file_name(
    new_values: Mapping[str, str],
    day: date,
    *,
    name_field: str = DEFAULT_NAME_FIELD,
    prefix: str = DEFAULT_PREFIX,
    fallback: str = DEFAULT_FALLBACK_NAME,
    max_length: int = DEFAULT_MAX_LENGTH,
    extension: str = ".docx",
) -> str:
    """Name one generated document after the record's identifying value."""
    name = sanitize_name(new_values.get(name_field) or fallback, max_length)
    if not name:
        name = fallback
    return f"{prefix}_{name}_{date_stamp(day)}{extension}"


def build_archive_file_name(day: date, prefix: str = ARCHIVE_PREFIX) -> str:
    return f"{prefix}_{date_stamp(day)}.zip"
