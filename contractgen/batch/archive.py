import io
import zipfile
from pathlib import PurePosixPath

from contractgen.batch.exceptions import ArchiveError


class ArchiveBuilder:
    """Accumulates generated documents and compresses them into one zip."""

    def __init__(self, compression_level: int = 6) -> None:
        self._compression_level = compression_level
        self._entries: dict[str, bytes] = {}

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def add(self, name: str, data: bytes) -> str:
        """Add an entry, suffixing ``_2``, ``_3`` ... when the name is taken.

        Returns:
            The name the entry was stored under.
        """
        unique = self._unique_name(name)
        self._entries[unique] = data
        return unique

    def finalize(self) -> bytes:
        """Build the deflate-compressed archive.

        Raises:
            ArchiveError: if the archive cannot be written.
        """
        try:
            output = io.BytesIO()
            with zipfile.ZipFile(
                output,
                "w",
                compression=zipfile.ZIP_DEFLATED,
                compresslevel=self._compression_level,
            ) as archive:
                for name, data in self._entries.items():
                    archive.writestr(name, data)
            return output.getvalue()
        except Exception as exc:
            raise ArchiveError(f"Failed to build archive: {exc}") from exc

    def _unique_name(self, name: str) -> str:
        if name not in self._entries:
            return name
        path = PurePosixPath(name)
        counter = 2
        while True:
            candidate = f"{path.stem}_{counter}{path.suffix}"
            if candidate not in self._entries:
                return candidate
            counter += 1
