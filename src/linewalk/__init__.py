"""linewalk: move forward, backward or randomly through the lines of huge files.

Example:
    >>> from linewalk import LineReader
    >>> with LineReader.open("server.log") as reader:
    ...     first = reader.next_line()
    ...     second = reader.next_line()
    ...     reader.prev_line() == first
    ...
    ...     # Walk the file backwards
    ...     reader.eof()
    ...     for line in reader.iter_lines_reversed():
    ...         print(line)
    >>>
    >>> # Uniform random lines need the opt-in index
    >>> with LineReader.open("corpus.txt", seed=42) as reader:
    ...     reader.build_index()
    ...     print(reader.random_line())
"""

from .exceptions import LineDecodeError, LineReaderError, StreamTruncatedError
from .index import LineIndex
from .models import CRLF, LF, CursorState, Direction, LineSpan
from .reader import LineReader

__version__ = "0.1.0"
__all__ = [
    # Core
    "LineReader",
    "LineIndex",
    "LineSpan",
    "CursorState",
    "Direction",
    # Terminators
    "LF",
    "CRLF",
    # Exceptions
    "LineReaderError",
    "LineDecodeError",
    "StreamTruncatedError",
]
