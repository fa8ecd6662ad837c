"""Internal pygit2 constants - keeps trivia out of public modules."""

from __future__ import annotations

from pygit2.enums import DeltaStatus, DiffFind, DiffOption, FileStatus

from diffgate.git.models import ChangeType

# Delta status -> change type; TYPECHANGE (e.g. file <-> symlink) is a modification
DELTA_CHANGE_TYPES: dict[int, ChangeType] = {
    DeltaStatus.ADDED: ChangeType.ADD,
    DeltaStatus.DELETED: ChangeType.DELETE,
    DeltaStatus.MODIFIED: ChangeType.MODIFY,
    DeltaStatus.TYPECHANGE: ChangeType.MODIFY,
    DeltaStatus.RENAMED: ChangeType.RENAME,
    DeltaStatus.COPIED: ChangeType.COPY,
}

# Similarity detection
FIND_RENAMES_AND_COPIES = DiffFind.FIND_RENAMES | DiffFind.FIND_COPIES

# Index status flags (relative to HEAD)
STATUS_INDEX_NEW = FileStatus.INDEX_NEW
STATUS_INDEX_MODIFIED = FileStatus.INDEX_MODIFIED

# Line diff options
DIFF_NORMAL = DiffOption.NORMAL
DIFF_PATIENCE = DiffOption.PATIENCE
DIFF_MINIMAL = DiffOption.MINIMAL
DIFF_FORCE_TEXT = DiffOption.FORCE_TEXT

# Tree diffs report file <-> symlink changes as one delta
TREE_DIFF_FLAGS = DiffOption.INCLUDE_TYPECHANGE
