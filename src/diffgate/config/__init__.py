"""Config module exports."""

from diffgate.config.loader import load_config
from diffgate.config.models import (
    DiffConfig,
    DiffGateConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "DiffConfig",
    "DiffGateConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
