"""Changed-line membership index.

Built once from the entries of one diff run and read-only afterwards, so
any number of threads may query it without locking.
"""

from __future__ import annotations

import os
from bisect import bisect_left
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import MappingProxyType

import structlog

from diffgate.diff.models import DiffEntryWrapper, Edit, EditType, normalize_path
from diffgate.lint.models import Diagnostic

log = structlog.get_logger(__name__)

# Sorted (begins, ends) of the new-side ranges that can anchor a line
_Ranges = tuple[tuple[int, ...], tuple[int, ...]]


class LineMembershipFilter:
    """Answers "is line N of file F an added or modified line?".

    Keys are normalized absolute new paths. When two entries map to the
    same path the later one wins.
    """

    def __init__(self, entries: Iterable[DiffEntryWrapper], *, root: Path | None = None) -> None:
        self._root = root
        edits: dict[str, tuple[Edit, ...]] = {}
        for entry in entries:
            key = entry.absolute_new_path
            if key in edits:
                log.warning("duplicate_diff_path", path=key, change=entry.change.change_type.value)
            edits[key] = entry.edits
        self._edits = MappingProxyType(edits)
        self._ranges = MappingProxyType({k: _changed_ranges(v) for k, v in edits.items()})

    def is_changed_line(self, path: str | os.PathLike[str], line: int) -> bool:
        """True if 1-based ``line`` of ``path`` was added or modified.

        Unknown paths are never changed. Pure deletions anchor no line.
        An edit covers lines ``begin_new + 1`` through ``end_new``.
        """
        if line < 1:
            return False
        ranges = self._ranges.get(self._key(path))
        if ranges is None:
            return False
        begins, ends = ranges
        i = bisect_left(begins, line) - 1
        return i >= 0 and line <= ends[i]

    def accept(self, diagnostic: Diagnostic) -> bool:
        """Keep only diagnostics reported on changed lines."""
        return self.is_changed_line(diagnostic.path, diagnostic.line)

    def edits_for(self, path: str | os.PathLike[str]) -> tuple[Edit, ...]:
        return self._edits.get(self._key(path), ())

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(self._edits)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return self._key(path) in self._edits

    def __len__(self) -> int:
        return len(self._edits)

    def __iter__(self) -> Iterator[str]:
        return iter(self._edits)

    def _key(self, path: str | os.PathLike[str]) -> str:
        if self._root is not None and not os.path.isabs(path):
            return normalize_path(self._root / path)
        return normalize_path(path)


def _changed_ranges(edits: tuple[Edit, ...]) -> _Ranges:
    spans = sorted(
        (e.begin_new, e.end_new) for e in edits if e.type not in (EditType.DELETE, EditType.EMPTY)
    )
    return tuple(b for b, _ in spans), tuple(e for _, e in spans)
