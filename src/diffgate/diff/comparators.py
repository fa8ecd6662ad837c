"""Line equivalence policies.

A comparator maps each raw line (terminator included) to a comparison key;
two lines are equal when their keys are equal. Keys never change the
number of lines, so edit positions always refer to the raw content.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

_WHITESPACE_RUN = re.compile(rb"[ \t\r\n\f\v]+")
_WHITESPACE = b" \t\r\n\f\v"


@dataclass(frozen=True, slots=True)
class LineComparator:
    """Named key function over raw lines."""

    name: str
    key: Callable[[bytes], bytes]

    def keys(self, lines: list[bytes]) -> list[bytes]:
        return [self.key(line) for line in lines]


def _exact(line: bytes) -> bytes:
    return line


def _ignore_all(line: bytes) -> bytes:
    return _WHITESPACE_RUN.sub(b"", line)


def _ignore_leading(line: bytes) -> bytes:
    return line.lstrip(_WHITESPACE)


def _ignore_trailing(line: bytes) -> bytes:
    return line.rstrip(_WHITESPACE)


def _ignore_change(line: bytes) -> bytes:
    return _WHITESPACE_RUN.sub(b" ", line.rstrip(_WHITESPACE))


DEFAULT = LineComparator("default", _exact)
IGNORE_ALL_WHITESPACE = LineComparator("ignore_all_whitespace", _ignore_all)
IGNORE_LEADING_WHITESPACE = LineComparator("ignore_leading_whitespace", _ignore_leading)
IGNORE_TRAILING_WHITESPACE = LineComparator("ignore_trailing_whitespace", _ignore_trailing)
IGNORE_WHITESPACE_CHANGE = LineComparator("ignore_whitespace_change", _ignore_change)

COMPARATORS: dict[str, LineComparator] = {
    c.name: c
    for c in (
        DEFAULT,
        IGNORE_ALL_WHITESPACE,
        IGNORE_LEADING_WHITESPACE,
        IGNORE_TRAILING_WHITESPACE,
        IGNORE_WHITESPACE_CHANGE,
    )
}


def get_comparator(name: str) -> LineComparator:
    try:
        return COMPARATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown comparator {name!r}; choose from {', '.join(sorted(COMPARATORS))}"
        ) from None


def split_lines(content: bytes) -> list[bytes]:
    """Split on ``\\n`` keeping terminators; a final unterminated line counts."""
    if not content:
        return []
    # bytes.splitlines would also break on a bare \r
    lines = content.split(b"\n")
    result = [line + b"\n" for line in lines[:-1]]
    if lines[-1]:
        result.append(lines[-1])
    return result
