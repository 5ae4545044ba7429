"""Line boundary search in both directions over a ChunkWindow."""

from __future__ import annotations

from .models import Direction, LineSpan
from .window import ChunkWindow


class TerminatorScanner:
    """Finds line boundaries by reading a window one chunk at a time.

    A terminator belongs to the line it ends. Forward and backward searches
    are separate because they treat that ownership differently: forward
    stops at the first terminator after a line start, backward first steps
    over the terminator that ends the previous line and then looks for the
    one before it.
    """

    def __init__(
        self, window: ChunkWindow, terminator: bytes, chunk_size: int
    ) -> None:
        self._window = window
        self._terminator = terminator
        self._chunk_size = chunk_size

    @property
    def size(self) -> int:
        return self._window.size

    def scan(self, from_offset: int, direction: Direction) -> LineSpan | None:
        """Find the next line in the given direction.

        Args:
            from_offset: FORWARD: start of the next unread line (0 at BOF).
                BACKWARD: start of the last line read (stream size at EOF).
            direction: Which way to search

        Returns:
            Span of the line found, or None when there is no line that way
        """
        if direction is Direction.FORWARD:
            return self._scan_forward(from_offset)
        return self._scan_backward(from_offset)

    def line_at(self, offset: int) -> LineSpan | None:
        """Return the line whose bytes, terminator included, cover offset."""
        if offset < 0 or offset >= self.size:
            return None
        return self._scan_forward(self._find_line_start(offset))

    def read(self, span: LineSpan) -> bytes:
        """Materialise the content bytes of a line."""
        return self._window.read_range(span.start, span.end)

    def _scan_forward(self, start: int) -> LineSpan | None:
        size = self.size
        if start >= size:
            return None

        term = self._terminator
        keep = len(term) - 1
        carry = b""
        pos = start
        while pos < size:
            chunk = self._window.read_chunk(pos, self._chunk_size, Direction.FORWARD)
            data = carry + chunk
            hit = data.find(term)
            if hit != -1:
                return LineSpan(start, pos - len(carry) + hit)
            # a multi-byte terminator may straddle the chunk boundary
            carry = data[-keep:] if keep else b""
            pos += len(chunk)

        return LineSpan(start, size)

    def _scan_backward(self, from_offset: int) -> LineSpan | None:
        from_offset = min(from_offset, self.size)
        if from_offset <= 0:
            return None

        end = from_offset
        term = self._terminator
        tail = self._window.read_chunk(end, len(term), Direction.BACKWARD)
        if tail == term:
            end -= len(term)

        return LineSpan(self._find_line_start(end), end)

    def _find_line_start(self, limit: int) -> int:
        """Offset just past the last terminator lying wholly before limit."""
        term = self._terminator
        keep = len(term) - 1
        carry = b""
        pos = limit
        while pos > 0:
            chunk = self._window.read_chunk(pos, self._chunk_size, Direction.BACKWARD)
            data = chunk + carry
            hit = data.rfind(term)
            if hit != -1:
                return pos - len(chunk) + hit + len(term)
            carry = data[:keep] if keep else b""
            pos -= len(chunk)

        return 0
