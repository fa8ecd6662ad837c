"""Centralized error mapping for pygit2 exceptions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

import pygit2

from diffgate.git.errors import RepositoryIOError


class ErrorMapper:
    """Maps pygit2 and OS exceptions to domain errors."""

    @staticmethod
    @contextmanager
    def guard(operation: str) -> Iterator[None]:
        """Context manager for consistent exception translation."""
        try:
            yield
        except (pygit2.GitError, OSError) as e:
            raise RepositoryIOError(operation, str(e)) from e


def git_operation(operation: str) -> AbstractContextManager[None]:
    """Translate storage failures raised inside the block."""
    return ErrorMapper.guard(operation)
