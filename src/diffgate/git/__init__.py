"""Git revision store module."""

from diffgate.git.errors import (
    AmbiguousObjectError,
    ContentTooLargeError,
    GitError,
    NotARepositoryError,
    ObjectNotFoundError,
    RepositoryIOError,
    UnresolvableRevisionError,
)
from diffgate.git.models import (
    ZERO_ID,
    BlobRef,
    ChangeRecord,
    ChangeType,
    FileMode,
    Snapshot,
    StagedPaths,
)
from diffgate.git.store import GitRevisionStore

__all__ = [
    # Main class
    "GitRevisionStore",
    # Models
    "ZERO_ID",
    "BlobRef",
    "ChangeRecord",
    "ChangeType",
    "FileMode",
    "Snapshot",
    "StagedPaths",
    # Errors
    "GitError",
    "NotARepositoryError",
    "UnresolvableRevisionError",
    "ObjectNotFoundError",
    "AmbiguousObjectError",
    "ContentTooLargeError",
    "RepositoryIOError",
]
