"""Loads a queue of replacement records from a JSON manifest.

Manifest shape::

    [
      {"id": 1, "selected_fields": ["owner_full_name"],
       "new_values": {"owner_full_name": "..."}},
      ...
    ]

``id`` is optional; records without one are numbered by position.
"""

import json
from pathlib import Path
from typing import Any

from contractgen.records.exceptions import RecordValidationError
from contractgen.records.models import ReplacementRecord


def load_records(path: Path) -> list[ReplacementRecord]:
    """Read and parse a manifest file.

    Raises:
        FileNotFoundError: if *path* does not exist.
        RecordValidationError: if the file is not valid JSON or not a valid manifest.
    """
    if not path.exists():
        raise FileNotFoundError(f"Record manifest not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RecordValidationError(f"Invalid JSON in {path}: {exc}") from exc
    return parse_records(data)


def parse_records(data: Any) -> list[ReplacementRecord]:
    if not isinstance(data, list):
        raise RecordValidationError("Record manifest must be a list")
    records = [_build_record(item, index) for index, item in enumerate(data)]
    ids = [record.id for record in records]
    if len(set(ids)) != len(ids):
        raise RecordValidationError("Record ids must be unique")
    return records


def _build_record(raw: Any, index: int) -> ReplacementRecord:
    if not isinstance(raw, dict):
        raise RecordValidationError(f"Record at index {index} must be an object")

    record_id = raw.get("id", index + 1)
    if isinstance(record_id, bool) or not isinstance(record_id, (int, str)):
        raise RecordValidationError(
            f"Record at index {index}: 'id' must be an integer or a string"
        )

    selected = raw.get("selected_fields")
    if not isinstance(selected, list) or not all(isinstance(f, str) for f in selected):
        raise RecordValidationError(
            f"Record at index {index}: 'selected_fields' must be a list of strings"
        )

    new_values = raw.get("new_values")
    if not isinstance(new_values, dict):
        raise RecordValidationError(
            f"Record at index {index}: 'new_values' must be an object"
        )
    for key, value in new_values.items():
        if not isinstance(value, str):
            raise RecordValidationError(
                f"Record at index {index}: new value for '{key}' must be a string"
            )

    return ReplacementRecord(id=record_id, selected_fields=tuple(selected), new_values=new_values)
