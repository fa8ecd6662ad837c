"""Lint filtering operations - build a changed-line filter and apply it."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from diffgate.config.loader import load_config
from diffgate.config.models import DiffConfig
from diffgate.diff.engine import DiffEngine
from diffgate.diff.models import normalize_path
from diffgate.diff.sources import RevisionStore
from diffgate.git.store import GitRevisionStore
from diffgate.lint.filter import LineMembershipFilter
from diffgate.lint.models import Diagnostic

log = structlog.get_logger(__name__)


def build_diff(
    root: Path | str,
    old_revision: str,
    new_revision: str,
    include_staged: bool | None = None,
    *,
    config: DiffConfig | None = None,
    store: RevisionStore | None = None,
) -> LineMembershipFilter:
    """Diff two revisions of the repository at ``root`` and index the result.

    Args:
        root: Repository working directory, or a directory inside it.
            Filter keys keep the spelling of this path (symlinks are not
            resolved), so callers can query with the paths they already use.
        old_revision: Baseline revision (e.g. "origin/main").
        new_revision: Target revision (e.g. "HEAD").
        include_staged: Diff staged content against the baseline.
            Defaults to the configured ``diff.include_staged``.
        config: Diff settings; loaded from ``root`` when omitted.
        store: Revision store; a GitRevisionStore on ``root`` when omitted.

    Returns:
        Read-only filter over the changed lines.

    Raises:
        GitError: On unresolvable revisions, missing or ambiguous objects,
            or storage failures. No partial filter is ever returned.
    """
    store = store or GitRevisionStore(root)
    work_root = _working_root(Path(root), store.root)
    if config is None:
        config = load_config(work_root).diff
    if include_staged is None:
        include_staged = config.include_staged

    engine = DiffEngine.from_config(store, config)
    entries = engine.run(old_revision, new_revision, include_staged, root=work_root)
    return LineMembershipFilter(entries, root=work_root)


def _working_root(root: Path, store_root: Path) -> Path:
    """The caller's spelling of the store's working directory.

    ``root`` may sit below the working directory or reach it through a
    symlink; the store root is only used when neither relation holds.
    """
    target = store_root.resolve()
    candidate = Path(normalize_path(root))
    for path in (candidate, *candidate.parents):
        if path.resolve() == target:
            return path
    log.debug("root_outside_store", root=str(root), store_root=str(store_root))
    return store_root


def filter_diagnostics(
    diagnostics: Iterable[Diagnostic], line_filter: LineMembershipFilter
) -> list[Diagnostic]:
    """Drop diagnostics that do not sit on a changed line."""
    kept: list[Diagnostic] = []
    dropped = 0
    for diagnostic in diagnostics:
        if line_filter.accept(diagnostic):
            kept.append(diagnostic)
        else:
            dropped += 1
    log.debug("diagnostics_filtered", kept=len(kept), dropped=dropped)
    return kept
