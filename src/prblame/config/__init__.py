"""Config module exports."""

from prblame.config.loader import load_config
from prblame.config.models import (
    AttributionConfig,
    LoggingConfig,
    OutputConfig,
    PrBlameConfig,
)

__all__ = [
    "load_config",
    "PrBlameConfig",
    "AttributionConfig",
    "LoggingConfig",
    "OutputConfig",
]
