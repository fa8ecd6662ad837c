"""Tests for the repository access layer and error mapping."""

from __future__ import annotations

from pathlib import Path

import pygit2
import pytest

from diffgate.git._internal import ErrorMapper, RepoAccess, git_operation
from diffgate.git.errors import (
    AmbiguousObjectError,
    ContentTooLargeError,
    GitError,
    NotARepositoryError,
    ObjectNotFoundError,
    RepositoryIOError,
    UnresolvableRevisionError,
)
from diffgate.git.models import FileMode


class TestErrorMapper:
    """pygit2 and OS failures become RepositoryIOError."""

    def test_pygit2_error(self) -> None:
        with pytest.raises(RepositoryIOError) as exc_info, ErrorMapper.guard("read index"):
            raise pygit2.GitError("corrupt")
        assert exc_info.value.operation == "read index"
        assert "corrupt" in str(exc_info.value)

    def test_os_error(self) -> None:
        with pytest.raises(RepositoryIOError), git_operation("read blob"):
            raise OSError("disk gone")

    def test_domain_errors_pass_through(self) -> None:
        with pytest.raises(ObjectNotFoundError), git_operation("lookup"):
            raise ObjectNotFoundError("abc")


class TestRepoAccess:
    """RepoAccess against a real repository."""

    def test_not_a_repository(self, tmp_path: Path) -> None:
        with pytest.raises(NotARepositoryError):
            RepoAccess(tmp_path / "nowhere")

    def test_path_is_workdir(self, repo_builder) -> None:
        access = RepoAccess(repo_builder.path)
        assert access.path.resolve() == repo_builder.path.resolve()

    def test_resolve_commit_by_branch_and_sha(self, repo_builder) -> None:
        sha = repo_builder.commit({"a.txt": "a\n"})
        access = RepoAccess(repo_builder.path)
        assert str(access.resolve_commit("main").id) == sha
        assert str(access.resolve_commit(sha[:10]).id) == sha

    def test_resolve_annotated_tag_peels_to_commit(self, repo_builder) -> None:
        sha = repo_builder.commit({"a.txt": "a\n"})
        repo_builder.repo.create_tag(
            "v1", pygit2.Oid(hex=sha), pygit2.enums.ObjectType.COMMIT, repo_builder.sig, "release"
        )
        access = RepoAccess(repo_builder.path)
        assert str(access.resolve_commit("v1").id) == sha

    def test_resolve_unknown(self, repo_builder) -> None:
        repo_builder.commit({"a.txt": "a\n"})
        with pytest.raises(UnresolvableRevisionError) as exc_info:
            RepoAccess(repo_builder.path).resolve_commit("no-such-branch")
        assert exc_info.value.revision == "no-such-branch"

    def test_lookup_missing_object(self, repo_builder) -> None:
        repo_builder.commit({"a.txt": "a\n"})
        with pytest.raises(ObjectNotFoundError):
            RepoAccess(repo_builder.path).lookup_object("f" * 40)

    def test_lookup_ambiguous_prefix(self, repo_builder) -> None:
        # Enough blobs that two of them share a 4-character prefix
        seen: dict[str, str] = {}
        prefix = None
        for i in range(2000):
            oid = str(repo_builder.repo.create_blob(f"blob {i}\n".encode()))
            if oid[:4] in seen:
                prefix = oid[:4]
                break
            seen[oid[:4]] = oid
        assert prefix is not None
        with pytest.raises(AmbiguousObjectError):
            RepoAccess(repo_builder.path).lookup_object(prefix)

    def test_tree_entry(self, repo_builder) -> None:
        sha = repo_builder.commit({"dir/a.txt": "a\n"})
        access = RepoAccess(repo_builder.path)
        tree_id = str(access.resolve_commit(sha).tree_id)

        ref = access.tree_entry(tree_id, "dir/a.txt")

        assert ref is not None
        assert ref.mode == FileMode.REGULAR
        assert access.tree_entry(tree_id, "dir/missing.txt") is None

    def test_index_entry(self, repo_builder) -> None:
        repo_builder.commit({"a.txt": "a\n"})
        repo_builder.stage({"b.txt": "b\n"})
        access = RepoAccess(repo_builder.path)
        ref = access.index_entry("b.txt")
        assert ref is not None
        assert access.read_blob(ref.object_id, 100) == b"b\n"
        assert access.index_entry("nope.txt") is None

    def test_read_blob_over_limit(self, repo_builder) -> None:
        oid = str(repo_builder.repo.create_blob(b"x" * 50))
        with pytest.raises(ContentTooLargeError) as exc_info:
            RepoAccess(repo_builder.path).read_blob(oid, 10)
        assert exc_info.value.size == 50
        assert exc_info.value.limit == 10

    def test_read_blob_rejects_tree(self, repo_builder) -> None:
        sha = repo_builder.commit({"a.txt": "a\n"})
        access = RepoAccess(repo_builder.path)
        tree_id = str(access.resolve_commit(sha).tree_id)
        with pytest.raises(GitError, match="not a blob"):
            access.read_blob(tree_id, 100)
