"""Custom exceptions for linewalk."""


class LineReaderError(Exception):
    """Base class for linewalk errors.

    Plain I/O failures from the underlying stream are not wrapped; they
    propagate as whatever the stream raised.
    """


class LineDecodeError(LineReaderError, ValueError):
    """Line bytes could not be decoded with the configured encoding.

    The cursor has already moved onto the offending line, so calling
    next_line() or prev_line() again continues past it.

    Attributes:
        start: Byte offset where the line starts
        end: Byte offset where the line content ends
        encoding: Codec that failed
        reason: Message from the underlying UnicodeDecodeError
    """

    def __init__(self, start: int, end: int, encoding: str, reason: str) -> None:
        self.start = start
        self.end = end
        self.encoding = encoding
        self.reason = reason
        super().__init__(
            f"Line at bytes {start}-{end} is not valid {encoding}: {reason}"
        )


class StreamTruncatedError(LineReaderError, OSError):
    """Stream returned fewer bytes than its recorded size promised.

    The size is measured once when the stream is attached. A stream that
    shrinks afterwards is not supported; create a new reader or call
    attach() again.

    Attributes:
        expected_size: Stream size in bytes when it was attached
        offset: Offset of the read that came up short
        actual_length: Bytes actually available from that offset
    """

    def __init__(self, expected_size: int, offset: int, actual_length: int) -> None:
        self.expected_size = expected_size
        self.offset = offset
        self.actual_length = actual_length
        super().__init__(
            f"Stream is shorter than its recorded size of {expected_size} bytes "
            f"(read at offset {offset} returned {actual_length} bytes)"
        )
