"""Internal components for git access - not part of public API."""

from diffgate.git._internal.access import RepoAccess
from diffgate.git._internal.errors import ErrorMapper, git_operation

__all__ = [
    "ErrorMapper",
    "RepoAccess",
    "git_operation",
]
