"""Archive download abstraction."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import BinaryIO


class ArchiveFetcher(ABC):
    """Abstract interface for streaming a remote archive.

    All implementations must implement this interface for testability.
    """

    @abstractmethod
    def open(self, url: str) -> AbstractContextManager[BinaryIO]:
        """Open a remote archive as a readable binary stream.

        The stream is consumed sequentially, so implementations do not need
        to buffer the whole download.

        Args:
            url: http(s) URL of the archive

        Raises:
            RuntimeError: If the request fails or returns a non-success status
        """
        ...
