from dataclasses import dataclass


@dataclass(frozen=True)
class TemplatePackage:
    """The reference document as uploaded: file name and container bytes."""

    name: str
    data: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.data)
