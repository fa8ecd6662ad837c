"""Diff engine - changed paths plus their line edits for a revision pair.

Pipeline:
1. resolve both revisions to commit snapshots
2. tree-level change detection (renames and copies paired by the store)
3. optionally, staged paths diffed against the old revision; these
   replace any step-2 record for the same new path
4. per-file edit computation, fanned out over a bounded thread pool
5. wrap each (record, edits) pair; results keep submission order
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import structlog

from diffgate.config.models import DEFAULT_BIG_FILE_THRESHOLD, DiffConfig
from diffgate.diff.algorithms import get_algorithm
from diffgate.diff.calculator import EditListCalculator
from diffgate.diff.comparators import get_comparator
from diffgate.diff.content import ContentOpener
from diffgate.diff.models import DiffEntryWrapper, Edit
from diffgate.diff.sources import RevisionStore
from diffgate.git.models import ChangeRecord, Snapshot

log = structlog.get_logger(__name__)


class DiffEngine:
    """Computes DiffEntryWrapper records for a pair of revisions.

    A run either returns entries for every changed path or raises: any
    per-file failure other than oversized content aborts the whole run.
    """

    def __init__(
        self,
        store: RevisionStore,
        *,
        calculator: EditListCalculator | None = None,
        big_file_threshold: int = DEFAULT_BIG_FILE_THRESHOLD,
        rename_threshold: int = 60,
        rename_limit: int = 400,
        max_workers: int = 4,
    ) -> None:
        self._store = store
        self._calculator = calculator or EditListCalculator()
        self._opener = ContentOpener(store, big_file_threshold)
        self._rename_threshold = rename_threshold
        self._rename_limit = rename_limit
        self._max_workers = max_workers

    @classmethod
    def from_config(cls, store: RevisionStore, config: DiffConfig) -> DiffEngine:
        calculator = EditListCalculator(
            algorithm=get_algorithm(config.algorithm),
            comparator=get_comparator(config.comparator),
        )
        return cls(
            store,
            calculator=calculator,
            big_file_threshold=config.big_file_threshold,
            rename_threshold=config.rename_threshold,
            rename_limit=config.rename_limit,
            max_workers=config.max_workers,
        )

    def run(
        self,
        old_revision: str,
        new_revision: str,
        include_staged: bool = False,
        *,
        root: Path | None = None,
    ) -> list[DiffEntryWrapper]:
        """Diff ``old_revision`` against ``new_revision`` (or the index).

        Args:
            old_revision: Baseline revision.
            new_revision: Target revision.
            include_staged: Diff staged content of added/changed paths
                against ``old_revision`` instead of ``new_revision``.
            root: Root for absolute paths; defaults to the store's root.

        Returns:
            Staged entries sorted by path, then detected changes in
            detection order.
        """
        start = time.monotonic()
        root = root or self._store.root
        log.info(
            "diff_run_started",
            old=old_revision,
            new=new_revision,
            include_staged=include_staged,
        )

        old = self._store.resolve(old_revision)
        new = self._store.resolve(new_revision)
        detected = self._store.detect_changes(
            old,
            new,
            rename_threshold=self._rename_threshold,
            rename_limit=self._rename_limit,
        )

        staged = self._staged_records(old) if include_staged else []
        staged_paths = {r.new_path for r in staged}
        records = [*staged, *(r for r in detected if r.new_path not in staged_paths)]

        edit_lists = self._compute_all(records)
        entries = [
            DiffEntryWrapper(root=root, change=record, edits=edits)
            for record, edits in zip(records, edit_lists, strict=True)
        ]

        log.info(
            "diff_run_finished",
            files=len(entries),
            staged=len(staged),
            replaced=len(detected) + len(staged) - len(records),
            duration_ms=round((time.monotonic() - start) * 1000, 1),
        )
        return entries

    def _staged_records(self, old: Snapshot) -> list[ChangeRecord]:
        index = self._store.staged_snapshot()
        records: list[ChangeRecord] = []
        for path in sorted(self._store.staged_paths().all()):
            new_ref = self._store.lookup(index, path)
            if new_ref is None:
                # Status and index disagree (e.g. a conflicted path has no stage-0 entry)
                log.warning("staged_path_not_in_index", path=path)
                continue
            old_ref = self._store.lookup(old, path)
            if old_ref is None:
                record = ChangeRecord.add(path, new_ref.object_id, new_ref.mode)
            else:
                record = ChangeRecord.modify(
                    path, old_ref.object_id, new_ref.object_id, old_ref.mode, new_ref.mode
                )
            log.debug("staged_entry", path=path, change=record.change_type.value)
            records.append(record)
        return records

    def _compute(self, record: ChangeRecord) -> tuple[Edit, ...]:
        old = self._opener.open_old(record)
        new = self._opener.open_new(record)
        return self._calculator.compute(old, new)

    def _compute_all(self, records: Sequence[ChangeRecord]) -> list[tuple[Edit, ...]]:
        if self._max_workers <= 1 or len(records) <= 1:
            return [self._compute(r) for r in records]
        executor = ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(records)),
            thread_name_prefix="diffgate-edits",
        )
        try:
            return list(executor.map(self._compute, records))
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
