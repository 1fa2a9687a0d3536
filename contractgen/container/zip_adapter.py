import io
import zipfile

from contractgen.container.base import BaseContainerAdapter
from contractgen.container.exceptions import InputRejectedError, RepackagingError


class ZipContainerAdapter(BaseContainerAdapter):
    """Reads and rewrites the body part of a zip-based document container.

    Entries are copied in their original order with their original names,
    timestamps and compression type, so format markers such as an uncompressed
    leading ``mimetype`` entry survive re-packaging.
    """

    def read_content(self, data: bytes) -> str:
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                raw = archive.read(self.CONTENT_PART)
        except zipfile.BadZipFile as exc:
            raise InputRejectedError(f"Not a valid {self.EXTENSION} container: {exc}") from exc
        except KeyError as exc:
            raise InputRejectedError(
                f"Container has no {self.CONTENT_PART} part; the file may be damaged"
            ) from exc
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InputRejectedError(f"{self.CONTENT_PART} is not UTF-8 text: {exc}") from exc

    def repackage(self, data: bytes, content: str) -> bytes:
        try:
            return self._rewrite(data, content.encode("utf-8"))
        except RepackagingError:
            raise
        except Exception as exc:
            raise RepackagingError(f"{self.EXTENSION} repackaging failed: {exc}") from exc

    def _rewrite(self, data: bytes, payload: bytes) -> bytes:
        output = io.BytesIO()
        with zipfile.ZipFile(io.BytesIO(data)) as source:
            if self.CONTENT_PART not in source.namelist():
                raise RepackagingError(f"Container has no {self.CONTENT_PART} part")
            with zipfile.ZipFile(output, "w", zipfile.ZIP_DEFLATED) as target:
                for info in source.infolist():
                    if info.filename == self.CONTENT_PART:
                        target.writestr(info, payload)
                    else:
                        target.writestr(info, source.read(info))
        return output.getvalue()


class DocxContainerAdapter(ZipContainerAdapter):
    """Word (OOXML) documents."""

    EXTENSION = ".docx"
    CONTENT_PART = "word/document.xml"


class OdtContainerAdapter(ZipContainerAdapter):
    """OpenDocument text documents."""

    EXTENSION = ".odt"
    CONTENT_PART = "content.xml"
