"""Bounded, offset-addressed reads over a seekable byte stream."""

from __future__ import annotations

import io
import logging
from typing import IO

from .exceptions import StreamTruncatedError
from .models import Direction

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192


def measure_stream(stream: IO[bytes]) -> int:
    """Return the total size of a seekable stream in bytes.

    The stream position is restored afterwards. Errors from seek() or tell()
    propagate unchanged.
    """
    position = stream.tell()
    size = stream.seek(0, io.SEEK_END)
    if size is None:
        size = stream.tell()
    stream.seek(position)
    return size


class ChunkWindow:
    """A single buffered chunk of a stream, re-read on demand.

    Every read is clipped to [0, size). The last chunk read is retained and
    requests that fall inside it are served without touching the stream;
    any other request replaces it.
    """

    def __init__(self, stream: IO[bytes], size: int) -> None:
        self._stream = stream
        self._size = size
        self._buffer = b""
        self._buffer_offset = 0

    @property
    def size(self) -> int:
        """Stream size recorded when the window was created."""
        return self._size

    def read_chunk(self, offset: int, max_len: int, direction: Direction) -> bytes:
        """Read up to max_len bytes next to offset.

        Args:
            offset: Anchor offset in the stream
            max_len: Upper bound on bytes returned
            direction: FORWARD reads bytes starting at offset; BACKWARD reads
                the bytes immediately preceding offset, clipped at 0

        Returns:
            The bytes read; empty if offset lies beyond the stream or the
            range is empty
        """
        if offset > self._size or offset < 0 or max_len <= 0:
            return b""

        if direction is Direction.FORWARD:
            start, stop = offset, min(offset + max_len, self._size)
        else:
            start, stop = max(0, offset - max_len), offset

        return self.read_range(start, stop)

    def read_range(self, start: int, stop: int) -> bytes:
        """Read exactly the bytes in [start, stop).

        Raises:
            StreamTruncatedError: If the stream ends before stop
        """
        start = max(0, start)
        stop = min(stop, self._size)
        if stop <= start:
            return b""

        buffer_stop = self._buffer_offset + len(self._buffer)
        if self._buffer_offset <= start and stop <= buffer_stop:
            lo = start - self._buffer_offset
            return self._buffer[lo : lo + (stop - start)]

        data = self._read_exact(start, stop - start)
        self._buffer = data
        self._buffer_offset = start
        return data

    def _read_exact(self, offset: int, length: int) -> bytes:
        self._stream.seek(offset)
        parts: list[bytes] = []
        remaining = length
        while remaining > 0:
            part = self._stream.read(remaining)
            if not part:
                break
            parts.append(part)
            remaining -= len(part)

        data = b"".join(parts)
        if len(data) < length:
            logger.debug(
                "Short read at offset %d: wanted %d bytes, got %d",
                offset,
                length,
                len(data),
            )
            raise StreamTruncatedError(self._size, offset, len(data))
        return data
