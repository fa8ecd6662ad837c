"""Lint models - diagnostics fed through the changed-line filter."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class Severity(Enum):
    """Diagnostic severity level."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single finding from a lint/type-check tool."""

    path: str
    line: int
    message: str
    source: str = "unknown"  # tool that produced this
    severity: Severity = Severity.WARNING
    column: int | None = None
    code: str | None = None  # "E501", "arg-type", "no-unused-vars"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Diagnostic:
        """Build from a JSON object; ``path``, ``line`` and ``message`` are required."""
        try:
            return cls(
                path=str(data["path"]),
                line=int(data["line"]),
                message=str(data["message"]),
                source=str(data.get("source", "unknown")),
                severity=Severity(data.get("severity", Severity.WARNING.value)),
                column=int(data["column"]) if data.get("column") is not None else None,
                code=data.get("code"),
            )
        except KeyError as e:
            raise ValueError(f"Diagnostic is missing field {e.args[0]!r}") from e

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["severity"] = self.severity.value
        return result
