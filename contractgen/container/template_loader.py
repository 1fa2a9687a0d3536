from pathlib import Path

from contractgen.container.base import BaseContainerAdapter
from contractgen.container.exceptions import InputRejectedError
from contractgen.container.models import TemplatePackage


class TemplateLoader:
    """Reads a reference template and rejects anything the adapter cannot handle."""

    DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024

    def __init__(
        self,
        adapter: BaseContainerAdapter,
        max_size_bytes: int | None = None,
    ) -> None:
        self._adapter = adapter
        self._max_size_bytes = (
            max_size_bytes if max_size_bytes is not None else self.DEFAULT_MAX_SIZE_BYTES
        )

    def load(self, path: Path) -> TemplatePackage:
        """Read and validate a template from disk.

        Raises:
            FileNotFoundError: if nothing exists at *path*.
            InputRejectedError: if the file is not an acceptable template.
        """
        if not path.exists():
            raise FileNotFoundError(f"Template not found: {path}")
        self._check_name(path.name)
        self._check_size(path.stat().st_size)
        return self.load_bytes(path.name, path.read_bytes())

    def load_bytes(self, name: str, data: bytes) -> TemplatePackage:
        """Validate an uploaded template held in memory.

        Raises:
            InputRejectedError: if the name, size or container is not acceptable.
        """
        self._check_name(name)
        self._check_size(len(data))
        self._check_container(data)
        return TemplatePackage(name=name, data=data)

    def _check_name(self, name: str) -> None:
        if not name.lower().endswith(self._adapter.EXTENSION):
            raise InputRejectedError(
                f"Only {self._adapter.EXTENSION} files are supported, got '{name}'"
            )

    def _check_size(self, size: int) -> None:
        if size > self._max_size_bytes:
            limit_mb = self._max_size_bytes / (1024 * 1024)
            raise InputRejectedError(
                f"Template is {size} bytes, larger than the {limit_mb:.1f} MB limit"
            )

    def _check_container(self, data: bytes) -> None:
        # raises InputRejectedError for non-zip data or a missing body part
        self._adapter.read_content(data)
