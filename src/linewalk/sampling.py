"""Random line selection, with or without a line index."""

from __future__ import annotations

import random

from .index import LineIndex
from .models import LineSpan
from .scanner import TerminatorScanner


class RandomSelector:
    """Picks a random line span.

    With an index every line is equally likely. Without one, a random byte
    offset is drawn and its enclosing line returned, so a line's chance of
    being picked is proportional to its length in bytes (terminator
    included). That bias is the price of skipping the full index scan.

    Uses a private random.Random so seeding it never touches the global
    random state.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def reseed(self, seed: int | None) -> None:
        self._rng.seed(seed)

    def choose(
        self, scanner: TerminatorScanner, index: LineIndex | None
    ) -> LineSpan | None:
        """Return a random line's span, or None if the stream has no lines."""
        if index is not None:
            if len(index) == 0:
                return None
            return index.span(self._rng.randrange(len(index)))

        if scanner.size == 0:
            return None
        return scanner.line_at(self._rng.randrange(scanner.size))
