"""Core module exports."""

from diffgate.core.errors import (
    ConfigError,
    DiffGateError,
    ErrorCode,
    OperationError,
)
from diffgate.core.logging import (
    configure_logging,
    get_log_file_path,
)

__all__ = [
    # Errors
    "DiffGateError",
    "ConfigError",
    "ErrorCode",
    "OperationError",
    # Logging
    "configure_logging",
    "get_log_file_path",
]
