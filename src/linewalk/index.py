"""Line-start offset index built from one forward pass."""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field

from .models import Direction, LineSpan
from .scanner import TerminatorScanner

logger = logging.getLogger(__name__)


@dataclass
class LineIndex:
    """Start offset of every line, in file order.

    Line ends are not stored: a line ends where the next one starts, minus
    the terminator. Only the final line's end is kept, since it may or may
    not be followed by a terminator.

    Attributes:
        offsets: Start offset of each line (0-indexed by line number)
        last_end: End offset of the final line's content
        terminator_length: Bytes between one line's end and the next start
    """

    offsets: list[int] = field(default_factory=list)
    last_end: int = 0
    terminator_length: int = 1

    def __len__(self) -> int:
        return len(self.offsets)

    def span(self, line_number: int) -> LineSpan:
        """Get the byte range of a line.

        Raises:
            IndexError: If line_number is out of range
        """
        if line_number < 0 or line_number >= len(self.offsets):
            raise IndexError(
                f"Line {line_number} out of range (0-{len(self.offsets) - 1})"
            )
        start = self.offsets[line_number]
        if line_number + 1 < len(self.offsets):
            end = self.offsets[line_number + 1] - self.terminator_length
        else:
            end = self.last_end
        return LineSpan(start, end)

    def line_number_at(self, offset: int) -> int:
        """Number of the line starting at or most recently before offset.

        Returns -1 when offset precedes every line (only possible for an
        empty index).
        """
        return bisect.bisect_right(self.offsets, offset) - 1


def build_index(scanner: TerminatorScanner, terminator_length: int) -> LineIndex:
    """Scan the whole stream forward and record where every line starts.

    Costs O(stream size) time and O(line count) memory.
    """
    logger.debug("Building line index over %d bytes", scanner.size)
    offsets: list[int] = []
    last_end = 0
    offset = 0

    while True:
        span = scanner.scan(offset, Direction.FORWARD)
        if span is None:
            break
        offsets.append(span.start)
        last_end = span.end
        offset = span.end + terminator_length

    logger.debug("Indexed %d lines", len(offsets))
    return LineIndex(
        offsets=offsets, last_end=last_end, terminator_length=terminator_length
    )
