"""The revision store contract the diff engine depends on.

``diffgate.git.GitRevisionStore`` is the production implementation;
anything with the same shape (an in-memory fake in tests, say) works.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from diffgate.git.models import BlobRef, ChangeRecord, Snapshot, StagedPaths


class RevisionStore(Protocol):
    """Protocol for revision/content sources."""

    @property
    def root(self) -> Path:
        """Working directory root; absolute paths are built from it."""
        ...

    def resolve(self, revision: str) -> Snapshot:
        """Resolve a revision to a commit snapshot.

        Raises:
            UnresolvableRevisionError: If the revision does not name a commit.
        """
        ...

    def staged_snapshot(self) -> Snapshot:
        """Snapshot of the staged index."""
        ...

    def lookup(self, snapshot: Snapshot, path: str) -> BlobRef | None:
        """Entry for ``path`` in ``snapshot``, or None when the path is missing."""
        ...

    def read_blob(self, object_id: str, limit: int) -> bytes:
        """Read a blob by full or abbreviated id.

        Raises:
            ObjectNotFoundError: No object matches the id.
            AmbiguousObjectError: An abbreviated id matches several objects.
            ContentTooLargeError: The blob is larger than ``limit`` bytes.
            RepositoryIOError: Storage access failed.
        """
        ...

    def detect_changes(
        self,
        old: Snapshot,
        new: Snapshot,
        *,
        rename_threshold: int = 60,
        rename_limit: int = 400,
    ) -> list[ChangeRecord]:
        """Changed paths between two commit snapshots, renames and copies paired."""
        ...

    def staged_paths(self) -> StagedPaths:
        """Paths newly added to or changed in the index."""
        ...
