from dataclasses import dataclass, field
from enum import Enum


class SubstitutionMode(str, Enum):
    """How literal occurrences of an original value are selected for replacement."""

    ALL = "all"  # every occurrence anywhere in the content
    BOUNDED = "bounded"  # only occurrences not embedded in a longer word or number


@dataclass
class SubstitutionResult:
    """Rewritten content plus per-field diagnostics."""

    content: str
    occurrences: dict[str, int] = field(default_factory=dict)
    missing_fields: list[str] = field(default_factory=list)

    @property
    def replaced_count(self) -> int:
        return sum(self.occurrences.values())
