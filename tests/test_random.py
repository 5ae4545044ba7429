"""Tests for random line selection."""

import io
from collections import Counter

import pytest

from linewalk import CRLF, CursorState, LineReader


@pytest.fixture
def skewed_bytes() -> bytes:
    """One very long line among many short ones."""
    short = [f"s{i:02d}".encode() for i in range(20)]
    return b"\n".join(short[:10] + [b"L" * 2000] + short[10:]) + b"\n"


class TestIndexedRandom:
    """Random selection with an index is uniform over lines."""

    def test_uniform_distribution(self, skewed_bytes: bytes):
        """Chi-square over line counts stays within tolerance."""
        reader = LineReader(io.BytesIO(skewed_bytes), seed=1234)
        reader.build_index()
        k = reader.total_lines
        samples = 21_000

        counts = Counter(reader.random_line() for _ in range(samples))

        assert len(counts) == k
        expected = samples / k
        chi_square = sum((observed - expected) ** 2 / expected for observed in counts.values())
        # 20 degrees of freedom; p = 0.0001 is at roughly 52.4
        assert chi_square < 52.4

    def test_moves_cursor(self):
        """random_line() leaves the cursor on the chosen line."""
        data = b"".join(f"L{i}\n".encode() for i in range(10))
        reader = LineReader(io.BytesIO(data), seed=7)
        reader.build_index()

        for _ in range(50):
            line = reader.random_line()
            number = int(line[1:])
            assert reader.position is CursorState.ON_LINE
            assert reader.current_line() == line

            following = reader.next_line()
            if number == 9:
                assert following is None
            else:
                assert following == f"L{number + 1}".encode()

            reader.random_line()
            current = int(reader.current_line()[1:])
            preceding = reader.prev_line()
            if current == 0:
                assert preceding is None
            else:
                assert preceding == f"L{current - 1}".encode()

    def test_empty_file(self):
        """No line on an empty file."""
        reader = LineReader(io.BytesIO(b""))
        reader.build_index()
        assert reader.random_line() is None


class TestUnindexedRandom:
    """Random selection without an index is length-biased."""

    def test_long_line_favoured(self, skewed_bytes: bytes):
        """The long line is picked more often than any short line."""
        reader = LineReader(io.BytesIO(skewed_bytes), seed=99, chunk_size=64)
        counts = Counter(reader.random_line() for _ in range(2_000))

        long_count = counts.pop(b"L" * 2000)
        assert long_count > max(counts.values(), default=0)
        assert long_count > 1_500

    def test_returns_real_lines(self):
        """Every pick is a complete line of the file, CRLF included."""
        lines = [b"alpha", b"", b"gamma gamma", b"d", b"epsilon"]
        data = b"\r\n".join(lines) + b"\r\n"
        reader = LineReader(io.BytesIO(data), terminator=CRLF, chunk_size=3, seed=5)

        picks = {reader.random_line() for _ in range(500)}

        assert picks <= set(lines)
        assert b"gamma gamma" in picks

    def test_moves_cursor(self):
        """Cursor lands on the picked line and navigation continues."""
        reader = LineReader(io.BytesIO(b"a\nb\nc\n"), seed=3)

        for _ in range(20):
            line = reader.random_line()
            assert reader.current_line() == line
            following = reader.next_line()
            assert following == {b"a": b"b", b"b": b"c", b"c": None}[line]

    def test_empty_file(self):
        """No line on an empty file."""
        reader = LineReader(io.BytesIO(b""))
        assert reader.random_line() is None
        assert reader.position is CursorState.BOF


class TestSeeding:
    """Tests for reproducible random picks."""

    def test_same_seed_same_sequence(self):
        """Readers seeded alike pick the same lines."""
        data = b"".join(f"{i}\n".encode() for i in range(100))
        first = LineReader(io.BytesIO(data), seed=42)
        second = LineReader(io.BytesIO(data), seed=42)

        assert [first.random_line() for _ in range(20)] == [
            second.random_line() for _ in range(20)
        ]

    def test_reseed(self):
        """seed() restarts the sequence."""
        data = b"".join(f"{i}\n".encode() for i in range(100))
        reader = LineReader(io.BytesIO(data))
        reader.build_index()

        reader.seed(8)
        run_a = [reader.random_line() for _ in range(10)]
        reader.seed(8)
        run_b = [reader.random_line() for _ in range(10)]

        assert run_a == run_b
