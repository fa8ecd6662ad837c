"""Lint module - restrict diagnostics to changed lines."""

from diffgate.lint.filter import LineMembershipFilter
from diffgate.lint.models import Diagnostic, Severity
from diffgate.lint.ops import build_diff, filter_diagnostics

__all__ = [
    "Diagnostic",
    "LineMembershipFilter",
    "Severity",
    "build_diff",
    "filter_diagnostics",
]
