"""Repository access layer - owns pygit2.Repository and exposes computed facts."""

from __future__ import annotations

import threading
from pathlib import Path

import pygit2

from diffgate.git._internal.constants import FIND_RENAMES_AND_COPIES, TREE_DIFF_FLAGS
from diffgate.git.errors import (
    AmbiguousObjectError,
    ContentTooLargeError,
    GitError,
    NotARepositoryError,
    ObjectNotFoundError,
    UnresolvableRevisionError,
)
from diffgate.git.models import BlobRef, FileMode


class RepoAccess:
    """Owns pygit2.Repository and provides normalized, read-only access to it.

    Object reads are serialized so one instance can be shared by the
    per-file diff workers.
    """

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            self._repo = pygit2.Repository(str(self._path))
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return Path(self._repo.workdir) if self._repo.workdir else self._path

    # =========================================================================
    # Resolution Helpers
    # =========================================================================

    def resolve_commit(self, ref: str) -> pygit2.Commit:
        try:
            obj, _ = self._repo.resolve_refish(ref)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise UnresolvableRevisionError(ref) from e
        if isinstance(obj, pygit2.Tag):
            obj = obj.peel(pygit2.Commit)
        if not isinstance(obj, pygit2.Commit):
            raise UnresolvableRevisionError(ref)
        return obj

    def lookup_object(self, object_id: str) -> pygit2.Object:
        """Look up a full or abbreviated object id."""
        try:
            return self._repo[object_id]
        except KeyError as e:
            raise ObjectNotFoundError(object_id) from e
        except ValueError as e:
            if "ambiguous" in str(e).lower():
                raise AmbiguousObjectError(object_id) from e
            raise ObjectNotFoundError(object_id) from e

    # =========================================================================
    # Content Access
    # =========================================================================

    def tree_entry(self, tree_id: str, path: str) -> BlobRef | None:
        with self._lock:
            tree = self.lookup_object(tree_id)
            if not isinstance(tree, pygit2.Tree):
                raise GitError(f"{tree_id} is not a tree")
            try:
                entry = tree[path]
            except KeyError:
                return None
            return BlobRef(str(entry.id), FileMode.from_raw(entry.filemode))

    def index_entry(self, path: str) -> BlobRef | None:
        with self._lock:
            try:
                entry = self._repo.index[path]
            except KeyError:
                return None
            return BlobRef(str(entry.id), FileMode.from_raw(entry.mode))

    def read_blob(self, object_id: str, limit: int) -> bytes:
        with self._lock:
            blob = self.lookup_object(object_id)
            if not isinstance(blob, pygit2.Blob):
                raise GitError(f"{object_id} is not a blob")
            if blob.size > limit:
                raise ContentTooLargeError(str(blob.id), blob.size, limit)
            return bytes(blob.data)

    # =========================================================================
    # Low-level pygit2 Operations (all pygit2 quirks live here)
    # =========================================================================

    def status(self) -> dict[str, int]:
        return self._repo.status(untracked_files="no")

    def diff_trees(
        self, old_tree_id: str, new_tree_id: str, *, rename_threshold: int, rename_limit: int
    ) -> pygit2.Diff:
        """Tree-to-tree diff with rename and copy detection applied."""
        old_tree = self.lookup_object(old_tree_id)
        new_tree = self.lookup_object(new_tree_id)
        diff = self._repo.diff(old_tree, new_tree, flags=TREE_DIFF_FLAGS)
        diff.find_similar(
            flags=FIND_RENAMES_AND_COPIES,
            rename_threshold=rename_threshold,
            copy_threshold=rename_threshold,
            rename_limit=rename_limit,
        )
        return diff

    def refresh_index(self) -> None:
        """Reload the index if it changed on disk since it was last read."""
        with self._lock:
            self._repo.index.read(False)
