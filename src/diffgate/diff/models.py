"""Data models for line-level diffs.

All models are frozen dataclasses - built once per diff run, never mutated.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from diffgate.git.models import ChangeRecord, ChangeType


class EditType(Enum):
    """Shape of an edit, derived from which of its ranges are empty."""

    INSERT = "insert"
    DELETE = "delete"
    REPLACE = "replace"
    EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class Edit:
    """Old lines ``[begin_old, end_old)`` replaced by new lines ``[begin_new, end_new)``.

    Positions are zero-indexed. For an empty range the begin position is
    the insertion point.
    """

    begin_old: int
    end_old: int
    begin_new: int
    end_new: int

    def __post_init__(self) -> None:
        if self.begin_old > self.end_old or self.begin_new > self.end_new:
            raise ValueError(f"Edit ranges must not be reversed: {self}")
        if self.begin_old < 0 or self.begin_new < 0:
            raise ValueError(f"Edit positions must not be negative: {self}")

    @property
    def type(self) -> EditType:
        if self.begin_old < self.end_old:
            return EditType.REPLACE if self.begin_new < self.end_new else EditType.DELETE
        return EditType.INSERT if self.begin_new < self.end_new else EditType.EMPTY

    @property
    def old_length(self) -> int:
        return self.end_old - self.begin_old

    @property
    def new_length(self) -> int:
        return self.end_new - self.begin_new


@dataclass(frozen=True, slots=True)
class DiffEntryWrapper:
    """A changed path together with its line edits and the repository root."""

    root: Path
    change: ChangeRecord
    edits: tuple[Edit, ...]

    @property
    def is_delete_only(self) -> bool:
        """True if the change only removes lines.

        An entry with no edits at all is not delete-only.
        """
        if self.change.change_type == ChangeType.DELETE:
            return True
        return bool(self.edits) and all(e.type == EditType.DELETE for e in self.edits)

    @property
    def new_file(self) -> Path:
        """On-disk location of the new side; deleted files keep their old location."""
        return self.root / self.change.path

    @property
    def absolute_new_path(self) -> str:
        return normalize_path(self.new_file)


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Absolute, normalized form used as the filter lookup key."""
    return os.path.normpath(os.path.abspath(path))
