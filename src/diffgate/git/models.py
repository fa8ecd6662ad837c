"""Value objects exchanged with the revision store."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Literal

ZERO_ID = "0" * 40

SnapshotKind = Literal["commit", "index"]


class ChangeType(Enum):
    """Kind of path-level change between two trees."""

    ADD = "add"
    MODIFY = "modify"
    DELETE = "delete"
    RENAME = "rename"
    COPY = "copy"


class FileMode(IntEnum):
    """Git tree entry modes."""

    MISSING = 0
    TREE = 0o040000
    REGULAR = 0o100644
    EXECUTABLE = 0o100755
    SYMLINK = 0o120000
    GITLINK = 0o160000

    @property
    def is_blob(self) -> bool:
        return self in (FileMode.REGULAR, FileMode.EXECUTABLE, FileMode.SYMLINK)

    @classmethod
    def from_raw(cls, mode: int) -> FileMode:
        """Map a raw mode to a known one; 0o100664 and friends are regular files."""
        try:
            return cls(mode)
        except ValueError:
            if mode & 0o170000 == 0o100000:
                return cls.EXECUTABLE if mode & 0o111 else cls.REGULAR
            raise


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """One changed path between two snapshots.

    ``None`` marks an absent side: ADD has no old path, DELETE has no new
    path. Object ids are resolved before the record is built.
    """

    change_type: ChangeType
    old_path: str | None
    new_path: str | None
    old_mode: FileMode = FileMode.MISSING
    new_mode: FileMode = FileMode.MISSING
    old_id: str = ZERO_ID
    new_id: str = ZERO_ID
    score: int = 0

    def __post_init__(self) -> None:
        if self.change_type == ChangeType.ADD and self.old_path is not None:
            raise ValueError("ADD record cannot carry an old path")
        if self.change_type == ChangeType.DELETE and self.new_path is not None:
            raise ValueError("DELETE record cannot carry a new path")
        if self.change_type == ChangeType.MODIFY and self.old_path != self.new_path:
            raise ValueError("MODIFY record must keep the same path")
        if self.old_path is None and self.new_path is None:
            raise ValueError("record needs at least one path")

    @property
    def path(self) -> str:
        """The new path, or the old one for deletions."""
        return self.new_path if self.new_path is not None else self.old_path  # type: ignore[return-value]

    @classmethod
    def add(cls, path: str, new_id: str, new_mode: FileMode = FileMode.REGULAR) -> ChangeRecord:
        return cls(ChangeType.ADD, None, path, FileMode.MISSING, new_mode, ZERO_ID, new_id)

    @classmethod
    def modify(
        cls,
        path: str,
        old_id: str,
        new_id: str,
        old_mode: FileMode = FileMode.REGULAR,
        new_mode: FileMode = FileMode.REGULAR,
    ) -> ChangeRecord:
        return cls(ChangeType.MODIFY, path, path, old_mode, new_mode, old_id, new_id)

    @classmethod
    def delete(cls, path: str, old_id: str, old_mode: FileMode = FileMode.REGULAR) -> ChangeRecord:
        return cls(ChangeType.DELETE, path, None, old_mode, FileMode.MISSING, old_id, ZERO_ID)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """A resolved tree of (path -> content): a commit, or the staged index."""

    kind: SnapshotKind
    revision: str
    tree_id: str | None = None


@dataclass(frozen=True, slots=True)
class BlobRef:
    """A path's entry inside a snapshot."""

    object_id: str
    mode: FileMode


@dataclass(frozen=True, slots=True)
class StagedPaths:
    """Paths staged relative to HEAD: newly added and changed."""

    added: frozenset[str] = field(default_factory=frozenset)
    modified: frozenset[str] = field(default_factory=frozenset)

    def all(self) -> frozenset[str]:
        return self.added | self.modified
