"""In-memory fake implementation of ArchiveFetcher for testing."""

import io
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO

from kitcraft.integrations.archive.abc import ArchiveFetcher


class FakeArchiveFetcher(ArchiveFetcher):
    """Serves pre-configured archive bytes by URL.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods.
    """

    def __init__(self, *, archives: dict[str, bytes] | None = None) -> None:
        """Create FakeArchiveFetcher.

        Args:
            archives: Mapping of URL -> archive bytes. Unknown URLs fail like
                an HTTP 404.
        """
        self._archives = archives or {}
        self._requested: list[str] = []

    @property
    def requested(self) -> list[str]:
        """Read-only access to requested URLs for test assertions."""
        return self._requested.copy()

    @contextmanager
    def open(self, url: str) -> Iterator[BinaryIO]:
        self._requested.append(url)
        data = self._archives.get(url)
        if data is None:
            raise RuntimeError(f"Failed to download archive {url}: HTTP 404")
        yield io.BytesIO(data)
