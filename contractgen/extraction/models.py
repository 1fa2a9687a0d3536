from collections.abc import Iterator, Mapping


class ExtractionResult(Mapping[str, str]):
    """Read-only mapping of field id to the value detected in a template.

    Only fields whose value passed the field's acceptance predicate appear.
    """

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def __getitem__(self, field_id: str) -> str:
        return self._values[field_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ExtractionResult({self._values!r})"

    @property
    def detected_fields(self) -> frozenset[str]:
        return frozenset(self._values)

    def to_dict(self) -> dict[str, str]:
        return dict(self._values)
