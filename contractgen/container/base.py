from abc import ABC, abstractmethod
from typing import ClassVar


class BaseContainerAdapter(ABC):
    """Contract for document container formats.

    A container is a zip archive with exactly one part holding the document
    body as XML text. Adapters read that part and write a rewritten copy of it
    back, passing every other part through untouched.
    """

    EXTENSION: ClassVar[str]
    CONTENT_PART: ClassVar[str]

    @abstractmethod
    def read_content(self, data: bytes) -> str:
        """Return the body part of the container as text.

        Raises:
            InputRejectedError: if *data* is not a readable container of this
                format.
        """

    @abstractmethod
    def repackage(self, data: bytes, content: str) -> bytes:
        """Return a new container equal to *data* with the body part replaced.

        Raises:
            RepackagingError: if the source container cannot be read or the new
                one cannot be written.
        """
