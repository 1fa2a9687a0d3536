from abc import ABC, abstractmethod


class BaseValueNormalizer(ABC):
    """Contract for field value normalizers."""

    @abstractmethod
    def normalize(self, field_id: str, raw_value: str) -> str:
        """Clean a raw capture for *field_id*.

        Args:
            field_id: Catalog id of the field the capture belongs to.
            raw_value: Text captured by a detection pattern.

        Returns:
            Cleaned value, possibly empty. Never raises; validity is decided
            by the field's acceptance predicate.
        """
