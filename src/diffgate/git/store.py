"""Revision store over pygit2 - the diff engine's view of a repository."""

from __future__ import annotations

from pathlib import Path

import pygit2
import structlog

from diffgate.git._internal import RepoAccess, git_operation
from diffgate.git._internal.constants import (
    DELTA_CHANGE_TYPES,
    STATUS_INDEX_MODIFIED,
    STATUS_INDEX_NEW,
)
from diffgate.git.errors import GitError
from diffgate.git.models import (
    BlobRef,
    ChangeRecord,
    ChangeType,
    FileMode,
    Snapshot,
    StagedPaths,
)

log = structlog.get_logger(__name__)


class GitRevisionStore:
    """Read-only access to commits, the staged index and their blobs.

    Never writes to the repository: the staged snapshot is read entry by
    entry from the index instead of being written out as a tree.
    """

    def __init__(self, repo_path: Path | str) -> None:
        self._access = RepoAccess(repo_path)

    @property
    def root(self) -> Path:
        """Working directory root used to build absolute paths."""
        return self._access.path

    def resolve(self, revision: str) -> Snapshot:
        commit = self._access.resolve_commit(revision)
        return Snapshot(kind="commit", revision=revision, tree_id=str(commit.tree_id))

    def staged_snapshot(self) -> Snapshot:
        with git_operation("read index"):
            self._access.refresh_index()
        return Snapshot(kind="index", revision="INDEX")

    def lookup(self, snapshot: Snapshot, path: str) -> BlobRef | None:
        with git_operation(f"lookup {path}"):
            if snapshot.kind == "index":
                return self._access.index_entry(path)
            if snapshot.tree_id is None:
                raise GitError(f"Snapshot {snapshot.revision!r} has no tree")
            return self._access.tree_entry(snapshot.tree_id, path)

    def read_blob(self, object_id: str, limit: int) -> bytes:
        with git_operation(f"read {object_id}"):
            return self._access.read_blob(object_id, limit)

    def detect_changes(
        self,
        old: Snapshot,
        new: Snapshot,
        *,
        rename_threshold: int = 60,
        rename_limit: int = 400,
    ) -> list[ChangeRecord]:
        if old.tree_id is None or new.tree_id is None:
            raise GitError("Change detection needs two commit snapshots")
        with git_operation("diff trees"):
            diff = self._access.diff_trees(
                old.tree_id,
                new.tree_id,
                rename_threshold=rename_threshold,
                rename_limit=rename_limit,
            )
            records = [
                record for delta in diff.deltas if (record := _record_from_delta(delta)) is not None
            ]
        log.debug(
            "changes_detected",
            old=old.revision,
            new=new.revision,
            count=len(records),
        )
        return records

    def staged_paths(self) -> StagedPaths:
        with git_operation("status"):
            status = self._access.status()
        added = frozenset(p for p, flags in status.items() if flags & STATUS_INDEX_NEW)
        modified = frozenset(
            p for p, flags in status.items() if flags & STATUS_INDEX_MODIFIED and p not in added
        )
        return StagedPaths(added=added, modified=modified)


def _record_from_delta(delta: pygit2.DiffDelta) -> ChangeRecord | None:
    change_type = DELTA_CHANGE_TYPES.get(delta.status)
    if change_type is None:
        log.debug("delta_skipped", path=delta.new_file.path, status=int(delta.status))
        return None
    old_path: str | None = delta.old_file.path
    new_path: str | None = delta.new_file.path
    if change_type == ChangeType.ADD:
        old_path = None
    elif change_type == ChangeType.DELETE:
        new_path = None
    return ChangeRecord(
        change_type=change_type,
        old_path=old_path,
        new_path=new_path,
        old_mode=FileMode.from_raw(delta.old_file.mode),
        new_mode=FileMode.from_raw(delta.new_file.mode),
        old_id=str(delta.old_file.id),
        new_id=str(delta.new_file.id),
        score=delta.similarity if change_type in (ChangeType.RENAME, ChangeType.COPY) else 0,
    )
