from __future__ import annotations

import io
from typing import Any, Iterator, Optional

from .ErrorTranslator import ErrorTranslator


class DownloadStream(io.RawIOBase):
    """Readable stream that pulls file content chunk by chunk as it is read."""

    def __init__(self, chunks: Iterator[bytes], path: str) -> None:
        super().__init__()
        self._chunks: Optional[Iterator[bytes]] = chunks
        self._buffer = b''
        self._path = path

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        while not self._buffer:
            chunk = self._next_chunk()
            if chunk is None:
                return 0
            self._buffer = chunk

        size = min(len(buffer), len(self._buffer))
        buffer[:size] = self._buffer[:size]
        self._buffer = self._buffer[size:]
        return size

    def close(self) -> None:
        if self._chunks is not None:
            close = getattr(self._chunks, 'close', None)
            if close is not None:
                close()
            self._chunks = None
        self._buffer = b''
        super().close()

    def _next_chunk(self) -> Optional[bytes]:
        if self._chunks is None:
            return None
        with ErrorTranslator.translating(self._path):
            return next(self._chunks, None)
