"""Line diff package - edit lists per changed file for a revision pair.

Public API re-exports for the diff subpackage.
"""

from diffgate.diff.algorithms import (
    ALGORITHMS,
    DiffAlgorithm,
    SequenceMatcherAlgorithm,
    XdiffAlgorithm,
    get_algorithm,
)
from diffgate.diff.calculator import EditListCalculator
from diffgate.diff.comparators import COMPARATORS, LineComparator, get_comparator, split_lines
from diffgate.diff.content import ContentOpener, gitlink_text
from diffgate.diff.engine import DiffEngine
from diffgate.diff.models import DiffEntryWrapper, Edit, EditType, normalize_path
from diffgate.diff.sources import RevisionStore

__all__ = [
    "ALGORITHMS",
    "COMPARATORS",
    "ContentOpener",
    "DiffAlgorithm",
    "DiffEngine",
    "DiffEntryWrapper",
    "Edit",
    "EditListCalculator",
    "EditType",
    "LineComparator",
    "RevisionStore",
    "SequenceMatcherAlgorithm",
    "XdiffAlgorithm",
    "get_algorithm",
    "get_comparator",
    "gitlink_text",
    "normalize_path",
    "split_lines",
]
