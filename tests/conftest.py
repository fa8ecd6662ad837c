"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides repository builders shared by all test packages.
"""

import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path

import pygit2
import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from diffgate.git.errors import (  # noqa: E402
    ContentTooLargeError,
    ObjectNotFoundError,
    UnresolvableRevisionError,
)
from diffgate.git.models import (  # noqa: E402
    BlobRef,
    ChangeRecord,
    FileMode,
    Snapshot,
    StagedPaths,
)

FileContent = str | bytes | None


class RepoBuilder:
    """Builds commits and staged states in a real repository."""

    def __init__(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)
        self.path = path
        self.repo = pygit2.init_repository(str(path), initial_head="main")
        self.repo.config["user.name"] = "Test User"
        self.repo.config["user.email"] = "test@example.com"
        self.sig = pygit2.Signature("Test User", "test@example.com")

    def write(self, files: Mapping[str, FileContent]) -> None:
        """Write (or delete, for None) files in the working tree only."""
        for name, content in files.items():
            target = self.path / name
            if content is None:
                target.unlink(missing_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                content = content.encode()
            target.write_bytes(content)

    def stage(self, files: Mapping[str, FileContent]) -> None:
        """Write files and record them in the index."""
        self.write(files)
        index = self.repo.index
        for name, content in files.items():
            if content is None:
                index.remove(name)
            else:
                index.add(name)
        index.write()

    def stage_gitlink(self, path: str, commit_sha: str) -> None:
        """Record a submodule link in the index without a checkout."""
        index = self.repo.index
        index.add(
            pygit2.IndexEntry(path, pygit2.Oid(hex=commit_sha), pygit2.enums.FileMode.COMMIT)
        )
        index.write()

    def commit(self, files: Mapping[str, FileContent] | None = None, message: str = "commit") -> str:
        """Stage ``files`` and commit the whole index; returns the commit sha."""
        if files:
            self.stage(files)
        tree = self.repo.index.write_tree()
        parents = [] if self.repo.head_is_unborn else [self.repo.head.target]
        oid = self.repo.create_commit("HEAD", self.sig, self.sig, message, tree, parents)
        return str(oid)


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Empty repository on branch main."""
    return RepoBuilder(tmp_path / "repo")


class FakeStore:
    """In-memory revision store.

    ``commits`` maps revision -> {path: content}; ``index`` is the staged
    snapshot. Blob ids are the contents' positions in an internal table.
    """

    def __init__(
        self,
        root: Path,
        commits: Mapping[str, Mapping[str, bytes]],
        *,
        changes: Mapping[tuple[str, str], list[ChangeRecord]] | None = None,
        index: Mapping[str, bytes] | None = None,
        staged: StagedPaths | None = None,
    ) -> None:
        self._root = root
        self.blobs: dict[str, bytes] = {}
        self._trees: dict[str, dict[str, BlobRef]] = {
            rev: {p: self.add_blob(c) for p, c in files.items()} for rev, files in commits.items()
        }
        self._index = {p: self.add_blob(c) for p, c in (index or {}).items()}
        self._changes = changes or {}
        self._staged = staged or StagedPaths()
        self.reads: list[str] = []

    def add_blob(self, content: bytes, mode: FileMode = FileMode.REGULAR) -> BlobRef:
        object_id = f"{len(self.blobs) + 1:040x}"
        self.blobs[object_id] = content
        return BlobRef(object_id, mode)

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, revision: str) -> Snapshot:
        if revision not in self._trees:
            raise UnresolvableRevisionError(revision)
        return Snapshot(kind="commit", revision=revision, tree_id=revision)

    def staged_snapshot(self) -> Snapshot:
        return Snapshot(kind="index", revision="INDEX")

    def lookup(self, snapshot: Snapshot, path: str) -> BlobRef | None:
        if snapshot.kind == "index":
            return self._index.get(path)
        return self._trees[snapshot.revision].get(path)

    def read_blob(self, object_id: str, limit: int) -> bytes:
        self.reads.append(object_id)
        if object_id not in self.blobs:
            raise ObjectNotFoundError(object_id)
        content = self.blobs[object_id]
        if len(content) > limit:
            raise ContentTooLargeError(object_id, len(content), limit)
        return content

    def detect_changes(
        self,
        old: Snapshot,
        new: Snapshot,
        *,
        rename_threshold: int = 60,
        rename_limit: int = 400,
    ) -> list[ChangeRecord]:
        if (old.revision, new.revision) in self._changes:
            return list(self._changes[(old.revision, new.revision)])
        old_tree = self._trees[old.revision]
        new_tree = self._trees[new.revision]
        records: list[ChangeRecord] = []
        for path in sorted(old_tree.keys() | new_tree.keys()):
            before, after = old_tree.get(path), new_tree.get(path)
            if before is None and after is not None:
                records.append(ChangeRecord.add(path, after.object_id, after.mode))
            elif after is None and before is not None:
                records.append(ChangeRecord.delete(path, before.object_id, before.mode))
            elif before is not None and after is not None:
                if self.blobs[before.object_id] != self.blobs[after.object_id]:
                    records.append(ChangeRecord.modify(path, before.object_id, after.object_id))
        return records

    def staged_paths(self) -> StagedPaths:
        return self._staged


@pytest.fixture
def make_store(tmp_path: Path) -> Callable[..., FakeStore]:
    """Factory for in-memory stores rooted at tmp_path."""

    def factory(commits: Mapping[str, Mapping[str, bytes]], **kwargs: object) -> FakeStore:
        return FakeStore(tmp_path, commits, **kwargs)  # type: ignore[arg-type]

    return factory


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's global config and DIFFGATE__ env vars out of tests."""
    monkeypatch.setattr(
        "diffgate.config.loader.GLOBAL_CONFIG_PATH",
        tmp_path_factory.mktemp("global") / "config.yaml",
    )
    for name in list(os.environ):
        if name.upper().startswith("DIFFGATE__"):
            monkeypatch.delenv(name)
