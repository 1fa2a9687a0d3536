from dataclasses import dataclass, field
from enum import Enum


class BatchState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class BatchOutcome:
    """Result of generating one record's document."""

    record_id: int | str
    success: bool
    file_name: str = ""
    document: bytes = b""
    error: str = ""


@dataclass
class BatchReport:
    """Summary of one batch run handed back to the caller."""

    processed_count: int
    total_count: int
    archive: bytes
    outcomes: list[BatchOutcome] = field(default_factory=list)
    state: BatchState = BatchState.COMPLETED

    @property
    def failed_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.success)

    @property
    def failures(self) -> list[BatchOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]
