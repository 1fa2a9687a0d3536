import threading
import time
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

_id_lock = threading.Lock()
_last_id = 0


def next_record_id() -> int:
    """Creation time in milliseconds, bumped so ids never repeat within a process."""
    global _last_id
    with _id_lock:
        _last_id = max(time.time_ns() // 1_000_000, _last_id + 1)
        return _last_id


@dataclass(frozen=True)
class ReplacementRecord:
    """One requested output document: which fields to change and to what."""

    id: int | str
    selected_fields: tuple[str, ...]
    new_values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "selected_fields", tuple(dict.fromkeys(self.selected_fields)))
        object.__setattr__(self, "new_values", MappingProxyType(dict(self.new_values)))

    @classmethod
    def create(
        cls,
        selected_fields: Iterable[str],
        new_values: Mapping[str, str],
        record_id: int | str | None = None,
    ) -> "ReplacementRecord":
        """Build a record, stamping it with a unique creation-time id by default."""
        if record_id is None:
            record_id = next_record_id()
        return cls(id=record_id, selected_fields=tuple(selected_fields), new_values=new_values)


@dataclass
class FieldIssue:
    """A validation error or warning attached to one field."""

    field: str
    message: str


@dataclass
class RecordValidationResult:
    """Outcome of validating the values entered for one record."""

    is_valid: bool = True
    errors: list[FieldIssue] = field(default_factory=list)
    warnings: list[FieldIssue] = field(default_factory=list)
    message: str = ""


class RecordQueue:
    """Ordered queue of records waiting for the next batch run."""

    def __init__(self) -> None:
        self._records: dict[int | str, ReplacementRecord] = {}

    def add(self, record: ReplacementRecord) -> None:
        if record.id in self._records:
            raise ValueError(f"Record {record.id} is already queued")
        self._records[record.id] = record

    def remove(self, record_id: int | str) -> ReplacementRecord | None:
        return self._records.pop(record_id, None)

    def clear(self) -> None:
        self._records.clear()

    def records(self) -> list[ReplacementRecord]:
        return list(self._records.values())

    def __iter__(self) -> Iterator[ReplacementRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records
