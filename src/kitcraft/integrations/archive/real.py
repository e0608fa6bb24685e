"""Real archive fetcher using httpx streaming."""

import io
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO, cast

import httpx

from kitcraft.integrations.archive.abc import ArchiveFetcher


class _ResponseReader(io.RawIOBase):
    """File-like view over an httpx byte iterator."""

    def __init__(self, chunks: Iterator[bytes], url: str) -> None:
        self._chunks = chunks
        self._url = url
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray | memoryview) -> int:  # type: ignore[override]
        while not self._pending:
            try:
                self._pending = next(self._chunks)
            except StopIteration:
                return 0
            except httpx.HTTPError as e:
                raise RuntimeError(f"Download of {self._url} interrupted: {e}") from e
        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size


class RealArchiveFetcher(ArchiveFetcher):
    """Production implementation that streams archives over HTTP(S)."""

    def __init__(self, timeout_seconds: float) -> None:
        self._timeout = httpx.Timeout(timeout_seconds, connect=10.0)

    @contextmanager
    def open(self, url: str) -> Iterator[BinaryIO]:
        try:
            with httpx.stream("GET", url, follow_redirects=True, timeout=self._timeout) as response:
                if response.status_code != httpx.codes.OK:
                    raise RuntimeError(
                        f"Failed to download archive {url}: HTTP {response.status_code}"
                    )
                reader = io.BufferedReader(_ResponseReader(response.iter_bytes(), url))
                yield cast(BinaryIO, reader)
        except httpx.HTTPError as e:
            raise RuntimeError(f"Failed to download archive {url}: {e}") from e
