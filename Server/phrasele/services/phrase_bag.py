"""
Phrase Bag

Shuffled draw order over phrase indices (a "bag" randomiser): every phrase is
drawn once per pass before any repeats.
"""

import random
from typing import List, Optional


class PhraseBag:
    """
    Permutation of phrase indices plus a read position.

    The bag regenerates itself when exhausted or when its size no longer
    matches the phrase count. A fresh bag may start with the index the
    previous bag ended on.
    """

    def __init__(self,
                 order: Optional[List[int]] = None,
                 position: int = 0,
                 rng: Optional[random.Random] = None):
        self.order: List[int] = list(order or [])
        self.position = position
        self._rng = rng or random.Random()

    def make_bag(self, size: int) -> None:
        """Shuffle ``0..size-1`` into a new bag and rewind."""
        self.order = list(range(size))
        self._rng.shuffle(self.order)
        self.position = 0

    def is_stale(self, size: int) -> bool:
        return len(self.order) != size or self.position >= len(self.order)

    def draw(self, size: int) -> int:
        """
        Return the next phrase index for a source of ``size`` phrases.

        An empty source draws index 0 so the caller can report the error
        when it tries to load it.
        """
        if size <= 0:
            return 0

        if self.is_stale(size):
            self.make_bag(size)

        index = self.order[self.position]
        self.position += 1
        return index
