"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class UnresolvableRevisionError(GitError):
    """Revision identifier does not name a commit."""

    def __init__(self, revision: str) -> None:
        super().__init__(f"Revision not found: {revision}")
        self.revision = revision


class ObjectNotFoundError(GitError):
    """Referenced object is missing from the object database."""

    def __init__(self, object_id: str) -> None:
        super().__init__(f"Object not found: {object_id}")
        self.object_id = object_id


class AmbiguousObjectError(GitError):
    """Abbreviated object id matches more than one object."""

    def __init__(self, object_id: str) -> None:
        super().__init__(f"Ambiguous object id: {object_id}")
        self.object_id = object_id


class ContentTooLargeError(GitError):
    """Blob exceeds the configured size limit.

    Never escapes a diff run: the content opener turns it into the
    binary sentinel.
    """

    def __init__(self, object_id: str, size: int, limit: int) -> None:
        super().__init__(f"Object {object_id} is {size} bytes, limit is {limit}")
        self.object_id = object_id
        self.size = size
        self.limit = limit


class RepositoryIOError(GitError):
    """Underlying storage access failed."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason
