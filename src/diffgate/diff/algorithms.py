"""Pluggable line diff algorithms.

Algorithms compare two sequences of comparison keys (see comparators.py)
and return the edits that turn the old sequence into the new one, in
ascending order and non-overlapping. Identical input always yields
identical output.
"""

from __future__ import annotations

import difflib
from collections.abc import Sequence
from typing import Protocol

import pygit2

from diffgate.diff.models import Edit
from diffgate.git._internal.constants import (
    DIFF_FORCE_TEXT,
    DIFF_MINIMAL,
    DIFF_NORMAL,
    DIFF_PATIENCE,
)


class DiffAlgorithm(Protocol):
    """Protocol for line diff strategies."""

    @property
    def name(self) -> str:
        """Algorithm identifier (e.g., 'myers', 'patience')."""
        ...

    def diff(self, old: Sequence[bytes], new: Sequence[bytes]) -> list[Edit]:
        """Compute ordered edits between two key sequences."""
        ...


class XdiffAlgorithm:
    """libgit2's xdiff through pygit2, with zero context lines.

    Keys are interned to short numeric tokens before diffing, so the
    comparison honours the comparator's keys and NUL bytes in the content
    never trigger binary detection.
    """

    def __init__(self, name: str, flags: int) -> None:
        self._name = name
        self._flags = flags | DIFF_FORCE_TEXT

    @property
    def name(self) -> str:
        return self._name

    def diff(self, old: Sequence[bytes], new: Sequence[bytes]) -> list[Edit]:
        old_text, new_text = _tokenize(old, new)
        patch = pygit2.Patch.create_from(
            old_text,
            new_text,
            flag=self._flags,
            context_lines=0,
            interhunk_lines=0,
        )
        return [_edit_from_hunk(hunk) for hunk in patch.hunks]


class SequenceMatcherAlgorithm:
    """Pure-Python fallback built on difflib.SequenceMatcher."""

    @property
    def name(self) -> str:
        return "difflib"

    def diff(self, old: Sequence[bytes], new: Sequence[bytes]) -> list[Edit]:
        matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
        return [
            Edit(i1, i2, j1, j2)
            for tag, i1, i2, j1, j2 in matcher.get_opcodes()
            if tag != "equal"
        ]


def _tokenize(old: Sequence[bytes], new: Sequence[bytes]) -> tuple[bytes, bytes]:
    table: dict[bytes, int] = {}

    def render(keys: Sequence[bytes]) -> bytes:
        return b"".join(b"%d\n" % table.setdefault(k, len(table)) for k in keys)

    return render(old), render(new)


def _edit_from_hunk(hunk: pygit2.DiffHunk) -> Edit:
    # Unified hunk headers are 1-based, except an empty side names the line it follows
    begin_old = hunk.old_start - 1 if hunk.old_lines else hunk.old_start
    begin_new = hunk.new_start - 1 if hunk.new_lines else hunk.new_start
    return Edit(
        begin_old,
        begin_old + hunk.old_lines,
        begin_new,
        begin_new + hunk.new_lines,
    )


MYERS = XdiffAlgorithm("myers", DIFF_NORMAL)
PATIENCE = XdiffAlgorithm("patience", DIFF_PATIENCE)
MINIMAL = XdiffAlgorithm("minimal", DIFF_MINIMAL)
DIFFLIB = SequenceMatcherAlgorithm()

# Name -> algorithm mapping
ALGORITHMS: dict[str, DiffAlgorithm] = {a.name: a for a in (MYERS, PATIENCE, MINIMAL, DIFFLIB)}


def get_algorithm(name: str) -> DiffAlgorithm:
    try:
        return ALGORITHMS[name]
    except KeyError:
        raise ValueError(
            f"Unknown diff algorithm {name!r}; choose from {', '.join(sorted(ALGORITHMS))}"
        ) from None
