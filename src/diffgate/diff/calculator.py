"""Per-file edit list computation."""

from __future__ import annotations

from diffgate.diff.algorithms import MYERS, DiffAlgorithm
from diffgate.diff.comparators import DEFAULT, LineComparator, split_lines
from diffgate.diff.models import Edit


class EditListCalculator:
    """Computes the ordered line edits between two versions of one file.

    Both the algorithm and the line equivalence policy are injected.
    """

    def __init__(
        self,
        algorithm: DiffAlgorithm = MYERS,
        comparator: LineComparator = DEFAULT,
    ) -> None:
        self.algorithm = algorithm
        self.comparator = comparator

    def compute(self, old: bytes, new: bytes) -> tuple[Edit, ...]:
        old_lines = split_lines(old)
        new_lines = split_lines(new)
        if not old_lines and not new_lines:
            return ()
        if not old_lines:
            return (Edit(0, 0, 0, len(new_lines)),)
        if not new_lines:
            return (Edit(0, len(old_lines), 0, 0),)
        edits = self.algorithm.diff(
            self.comparator.keys(old_lines),
            self.comparator.keys(new_lines),
        )
        return tuple(edits)
