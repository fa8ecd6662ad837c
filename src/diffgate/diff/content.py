"""Opens one side of a change as bytes.

Shared by every path the engine diffs, whether it comes from tree-level
change detection or from the staged index.
"""

from __future__ import annotations

import structlog

from diffgate.config.models import DEFAULT_BIG_FILE_THRESHOLD
from diffgate.diff.sources import RevisionStore
from diffgate.git.errors import ContentTooLargeError
from diffgate.git.models import ZERO_ID, ChangeRecord, FileMode

log = structlog.get_logger(__name__)

EMPTY = b""

# Oversized content; deliberately indistinguishable from empty content
BINARY = b""


class ContentOpener:
    """Turns (mode, object id) pairs into diffable bytes.

    - missing side or non-blob entry: empty content
    - submodule link: one synthetic ``Subproject commit <id>`` line
    - blob above the size threshold: the binary sentinel, no line edits
    """

    def __init__(
        self,
        store: RevisionStore,
        big_file_threshold: int = DEFAULT_BIG_FILE_THRESHOLD,
    ) -> None:
        self._store = store
        self._big_file_threshold = big_file_threshold

    def open(self, mode: FileMode, object_id: str) -> bytes:
        if mode == FileMode.GITLINK:
            return gitlink_text(object_id)
        if mode == FileMode.MISSING or object_id == ZERO_ID:
            return EMPTY
        if not mode.is_blob:
            return EMPTY
        try:
            return self._store.read_blob(object_id, self._big_file_threshold)
        except ContentTooLargeError as e:
            log.info("content_too_large", object_id=e.object_id, size=e.size, limit=e.limit)
            return BINARY

    def open_old(self, record: ChangeRecord) -> bytes:
        return self.open(record.old_mode, record.old_id)

    def open_new(self, record: ChangeRecord) -> bytes:
        return self.open(record.new_mode, record.new_id)


def gitlink_text(object_id: str) -> bytes:
    if object_id == ZERO_ID:
        return EMPTY
    return f"Subproject commit {object_id}\n".encode("ascii")
