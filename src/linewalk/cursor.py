"""Cursor state machine: BOF, on a line, or EOF."""

from __future__ import annotations

from .index import LineIndex
from .models import CursorState, Direction, LineSpan
from .scanner import TerminatorScanner


class Cursor:
    """Tracks the last line returned and decides where the next move starts.

    Exactly one of BOF, ON_LINE and EOF holds. Only the span of the most
    recently returned line is remembered.
    """

    def __init__(self) -> None:
        self._state = CursorState.BOF
        self._span: LineSpan | None = None

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def span(self) -> LineSpan | None:
        """Span of the line the cursor is on, None at BOF or EOF."""
        return self._span

    def to_bof(self) -> None:
        self._state = CursorState.BOF
        self._span = None

    def to_eof(self) -> None:
        self._state = CursorState.EOF
        self._span = None

    def move_to(self, span: LineSpan) -> None:
        self._state = CursorState.ON_LINE
        self._span = span

    def advance(
        self,
        scanner: TerminatorScanner,
        index: LineIndex | None,
        terminator_length: int,
    ) -> LineSpan | None:
        """Step to the following line, or to EOF when there is none."""
        if self._state is CursorState.EOF:
            return None

        if index is not None:
            if self._span is None:
                line_number = 0
            else:
                line_number = index.line_number_at(self._span.start) + 1
            span = index.span(line_number) if line_number < len(index) else None
        else:
            from_offset = 0 if self._span is None else self._span.end + terminator_length
            span = scanner.scan(from_offset, Direction.FORWARD)

        if span is None:
            self.to_eof()
        else:
            self.move_to(span)
        return span

    def retreat(
        self, scanner: TerminatorScanner, index: LineIndex | None
    ) -> LineSpan | None:
        """Step to the preceding line, or to BOF when there is none."""
        if self._state is CursorState.BOF:
            return None

        if index is not None:
            if self._span is None:
                line_number = len(index) - 1
            else:
                line_number = index.line_number_at(self._span.start) - 1
            span = index.span(line_number) if line_number >= 0 else None
        else:
            from_offset = scanner.size if self._span is None else self._span.start
            span = scanner.scan(from_offset, Direction.BACKWARD)

        if span is None:
            self.to_bof()
        else:
            self.move_to(span)
        return span
