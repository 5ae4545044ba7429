"""Bidirectional line reader over a seekable byte stream."""

from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import IO, Any, Iterator, Union

from .cursor import Cursor
from .exceptions import LineDecodeError
from .index import LineIndex, build_index
from .models import TERMINATORS, CursorState, LineSpan
from .sampling import RandomSelector
from .scanner import TerminatorScanner
from .window import DEFAULT_CHUNK_SIZE, ChunkWindow, measure_stream

logger = logging.getLogger(__name__)

Line = Union[bytes, str]


class LineReader:
    """Move forward, backward or randomly through the lines of a large file.

    Only one buffered chunk and the span of the current line are held in
    memory; an optional index of line starts can be built for O(log n)
    navigation and uniform random picks.

    The reader owns the stream's position. It is not thread-safe: use one
    reader per thread, or serialise calls externally. File size is measured
    once; if the stream changes length afterwards, behaviour is undefined
    until attach() is called again.

    Example:
        >>> with LineReader.open("access.log") as reader:
        ...     print(reader.next_line())
        ...     reader.eof()
        ...     print(reader.prev_line())  # last line
        ...     print(reader.random_line())
    """

    def __init__(
        self,
        stream: IO[bytes],
        *,
        terminator: Union[bytes, str] = b"\n",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str | None = None,
        seed: int | None = None,
    ) -> None:
        """Wrap an open binary stream.

        Args:
            stream: Readable, seekable binary stream. Not closed by the reader.
            terminator: Line terminator, b"\\n" or b"\\r\\n"
            chunk_size: Bytes fetched per buffered read
            encoding: Decode lines to str with this codec (None returns bytes)
            seed: Seed for random_line() (None uses system randomness)

        Raises:
            ValueError: If terminator or chunk_size is invalid
            OSError: If the stream's size cannot be determined
        """
        if isinstance(terminator, str):
            terminator = terminator.encode("ascii")
        if terminator not in TERMINATORS:
            raise ValueError(
                f"Unsupported terminator {terminator!r}; use b'\\n' or b'\\r\\n'"
            )
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if encoding is not None:
            codecs.lookup(encoding)

        self._terminator = terminator
        self._chunk_size = chunk_size
        self._encoding = encoding
        self._selector = RandomSelector(seed)
        self._cursor = Cursor()
        self._index: LineIndex | None = None
        self._owns_stream = False

        self._stream = stream
        self._scanner = self._make_scanner(stream)

    @classmethod
    def open(cls, file_path: Union[str, Path], **options: Any) -> "LineReader":
        """Open a file in binary mode and wrap it.

        The returned reader owns the file handle and closes it in close().

        Raises:
            FileNotFoundError: If the file does not exist
        """
        stream = open(Path(file_path), "rb")
        try:
            reader = cls(stream, **options)
        except BaseException:
            stream.close()
            raise
        reader._owns_stream = True
        return reader

    def _make_scanner(self, stream: IO[bytes]) -> TerminatorScanner:
        size = measure_stream(stream)
        logger.debug("Attached stream of %d bytes", size)
        return TerminatorScanner(
            ChunkWindow(stream, size), self._terminator, self._chunk_size
        )

    def attach(self, stream: IO[bytes]) -> None:
        """Point the reader at a different stream.

        Measures the new stream, discards any index and resets to BOF. A
        stream previously opened by LineReader.open() is closed first.
        """
        scanner = self._make_scanner(stream)
        if self._owns_stream and stream is not self._stream:
            self._stream.close()
        self._owns_stream = False
        self._stream = stream
        self._scanner = scanner
        self._index = None
        self._cursor.to_bof()

    # ─────────────────────────────────────────────────────────────────────
    # Navigation
    # ─────────────────────────────────────────────────────────────────────

    def next_line(self) -> Line | None:
        """Return the line after the current one, or None at EOF."""
        span = self._cursor.advance(self._scanner, self._index, len(self._terminator))
        return None if span is None else self._read(span)

    def prev_line(self) -> Line | None:
        """Return the line before the current one, or None at BOF."""
        span = self._cursor.retreat(self._scanner, self._index)
        return None if span is None else self._read(span)

    def current_line(self) -> Line | None:
        """Re-read the line under the cursor without moving it.

        Returns None at BOF or EOF.
        """
        span = self._cursor.span
        return None if span is None else self._read(span)

    def random_line(self) -> Line | None:
        """Return a random line and move the cursor onto it.

        Uniform over lines when an index is built; otherwise biased towards
        longer lines. Returns None for an empty stream.
        """
        span = self._selector.choose(self._scanner, self._index)
        if span is None:
            return None
        self._cursor.move_to(span)
        return self._read(span)

    def bof(self) -> "LineReader":
        """Reset to before the first line; next_line() returns the first."""
        self._cursor.to_bof()
        return self

    def eof(self) -> "LineReader":
        """Reset to after the last line; prev_line() returns the last."""
        self._cursor.to_eof()
        return self

    def iter_lines(self) -> Iterator[Line]:
        """Yield lines forward from the current position until EOF."""
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line

    def iter_lines_reversed(self) -> Iterator[Line]:
        """Yield lines backward from the current position until BOF."""
        while True:
            line = self.prev_line()
            if line is None:
                return
            yield line

    def __iter__(self) -> Iterator[Line]:
        return self.iter_lines()

    def seed(self, seed: int | None) -> None:
        """Reseed the generator used by random_line()."""
        self._selector.reseed(seed)

    def _read(self, span: LineSpan) -> Line:
        raw = self._scanner.read(span)
        if self._encoding is None:
            return raw
        try:
            return raw.decode(self._encoding)
        except UnicodeDecodeError as e:
            raise LineDecodeError(span.start, span.end, self._encoding, str(e)) from e

    # ─────────────────────────────────────────────────────────────────────
    # Index
    # ─────────────────────────────────────────────────────────────────────

    def build_index(self) -> LineIndex:
        """Scan the whole stream and index every line start.

        Replaces any existing index. Costs one full read of the stream and
        memory proportional to the line count, so it is opt-in.
        """
        self._index = build_index(self._scanner, len(self._terminator))
        return self._index

    def drop_index(self) -> None:
        """Discard the index and fall back to scanning."""
        self._index = None

    @property
    def index(self) -> LineIndex | None:
        return self._index

    @property
    def has_index(self) -> bool:
        return self._index is not None

    @property
    def total_lines(self) -> int | None:
        """Number of lines, known only once an index is built."""
        return len(self._index) if self._index is not None else None

    # ─────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────

    @property
    def file_size(self) -> int:
        """Size of the stream in bytes when it was attached."""
        return self._scanner.size

    @property
    def terminator(self) -> bytes:
        return self._terminator

    @property
    def position(self) -> CursorState:
        """BOF, ON_LINE or EOF."""
        return self._cursor.state

    @property
    def span(self) -> LineSpan | None:
        """Byte range of the current line, None at BOF or EOF."""
        return self._cursor.span

    def close(self) -> None:
        """Close the stream if it was opened by LineReader.open()."""
        if self._owns_stream:
            self._stream.close()
            self._owns_stream = False

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"LineReader(size={self.file_size}, terminator={self._terminator!r}, "
            f"position={self._cursor.state.value}, indexed={self.has_index})"
        )
