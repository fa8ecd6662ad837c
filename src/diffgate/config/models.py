"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (DIFFGATE__SECTION__KEY)
3. Repo YAML (.diffgate/config.yaml)
4. Global YAML (~/.config/diffgate/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    DIFFGATE__<SECTION>__<KEY>=<VALUE>

Examples:
    DIFFGATE__LOGGING__LEVEL=DEBUG
    DIFFGATE__DIFF__ALGORITHM=patience
    DIFFGATE__DIFF__MAX_WORKERS=8
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

AlgorithmName = Literal["myers", "patience", "minimal", "difflib"]

ComparatorName = Literal[
    "default",
    "ignore_all_whitespace",
    "ignore_leading_whitespace",
    "ignore_trailing_whitespace",
    "ignore_whitespace_change",
]

DEFAULT_BIG_FILE_THRESHOLD = 10 * 1024 * 1024


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        DIFFGATE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO logs each diff run, DEBUG every diffed file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DiffConfig(BaseModel):
    """Diff engine configuration.

    Env vars:
        DIFFGATE__DIFF__ALGORITHM: Line diff algorithm (myers, patience, minimal, difflib)
        DIFFGATE__DIFF__COMPARATOR: Line equivalence policy
        DIFFGATE__DIFF__BIG_FILE_THRESHOLD: Blobs above this many bytes are not line-diffed
        DIFFGATE__DIFF__RENAME_THRESHOLD: Similarity score (0-100) for rename/copy pairing
        DIFFGATE__DIFF__RENAME_LIMIT: Max candidates considered by rename detection
        DIFFGATE__DIFF__MAX_WORKERS: Parallel per-file edit computation
        DIFFGATE__DIFF__INCLUDE_STAGED: Diff staged content instead of the new revision
    """

    algorithm: AlgorithmName = Field(
        default="myers",
        description="Line diff algorithm. 'difflib' runs in pure Python.",
    )
    comparator: ComparatorName = Field(
        default="default",
        description="Line equivalence policy. Whitespace-insensitive comparators "
        "hide reindentation from the changed-line set.",
    )
    big_file_threshold: int = Field(
        default=DEFAULT_BIG_FILE_THRESHOLD,
        description="Blobs larger than this (bytes) are treated as binary and produce "
        "no line edits. RISK: Setting too high may cause memory issues.",
    )
    rename_threshold: int = Field(
        default=60,
        description="Minimum similarity score (0-100) to pair a delete with an add.",
    )
    rename_limit: int = Field(
        default=400,
        description="Max number of rename candidates before detection is skipped.",
    )
    max_workers: int = Field(
        default=4,
        description="Parallel per-file edit workers. 1 computes edits inline.",
    )
    include_staged: bool = Field(
        default=False,
        description="Diff staged (index) content against the old revision.",
    )

    @field_validator("rename_threshold")
    @classmethod
    def validate_rename_threshold(cls, v: int) -> int:
        if not (0 <= v <= 100):
            raise ValueError(f"rename_threshold must be 0-100, got {v}")
        return v

    @field_validator("big_file_threshold", "rename_limit", "max_workers")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be positive, got {v}")
        return v


class DiffGateConfig(BaseModel):
    """Root configuration for diffgate.

    All settings can be configured via:
    1. Environment variables: DIFFGATE__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    diff: DiffConfig = Field(default_factory=DiffConfig)
