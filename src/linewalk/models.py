"""Data models for linewalk."""

from dataclasses import dataclass
from enum import Enum

LF = b"\n"
CRLF = b"\r\n"

TERMINATORS = (LF, CRLF)


class Direction(Enum):
    """Which way a scan or chunk read runs relative to an offset."""

    FORWARD = "forward"
    BACKWARD = "backward"


class CursorState(Enum):
    """Where the cursor currently sits.

    BOF and EOF are sentinels before the first and after the last line.
    """

    BOF = "bof"
    ON_LINE = "on_line"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class LineSpan:
    """Byte range of a single line.

    Attributes:
        start: Offset of the first content byte
        end: Offset one past the last content byte (terminator excluded)
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        """Length of the line content in bytes."""
        return self.end - self.start
