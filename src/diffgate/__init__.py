"""diffgate - restrict lint findings to the lines a change introduced."""

from diffgate.diff import DiffEngine, DiffEntryWrapper, Edit, EditListCalculator, EditType
from diffgate.git import GitRevisionStore
from diffgate.lint import Diagnostic, LineMembershipFilter, build_diff, filter_diagnostics

__version__ = "0.1.0"

__all__ = [
    "Diagnostic",
    "DiffEngine",
    "DiffEntryWrapper",
    "Edit",
    "EditListCalculator",
    "EditType",
    "GitRevisionStore",
    "LineMembershipFilter",
    "build_diff",
    "filter_diagnostics",
]
