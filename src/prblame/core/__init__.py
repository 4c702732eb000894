"""Core module exports."""

from prblame.core.errors import (
    ConfigError,
    ErrorCode,
    PrBlameError,
    WorkerPoolError,
)
from prblame.core.logging import configure_logging, get_logger, level_for_verbosity
from prblame.core.progress import progress_bar, status

__all__ = [
    # Errors
    "PrBlameError",
    "ConfigError",
    "ErrorCode",
    "WorkerPoolError",
    # Logging
    "configure_logging",
    "get_logger",
    "level_for_verbosity",
    # Progress
    "progress_bar",
    "status",
]
