"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI options)
2. Environment variables (PRBLAME__SECTION__KEY)
3. Repo YAML (.prblame.yaml at the repository root, or --config PATH)
4. Global YAML (~/.config/prblame/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    PRBLAME__<SECTION>__<KEY>=<VALUE>

Examples:
    PRBLAME__LOGGING__LEVEL=DEBUG
    PRBLAME__ATTRIBUTION__CONTEXT_LINES=3
    PRBLAME__ATTRIBUTION__MAX_CONCURRENCY=8
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_CONTEXT_LINES = 1


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
        PRBLAME__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Raised by -v (INFO) and -vv (DEBUG).",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class AttributionConfig(BaseModel):
    """Change attribution configuration.

    Env vars:
        PRBLAME__ATTRIBUTION__CONTEXT_LINES: Unchanged lines counted around each edit
        PRBLAME__ATTRIBUTION__MAX_FILE_SIZE: Skip files larger than this (bytes)
        PRBLAME__ATTRIBUTION__MAX_CONCURRENCY: Blame workers, 0 = one per CPU
        PRBLAME__ATTRIBUTION__STOP_AT: Don't look further back than this revision
    """

    context_lines: int = Field(
        default=DEFAULT_CONTEXT_LINES,
        description="How many lines around each modification to count.",
    )
    max_file_size: int | None = Field(
        default=None,
        description="Ignore files larger than this (in bytes) to make things faster. "
        "None means unbounded.",
    )
    max_concurrency: int = Field(
        default=0,
        description="Maximum number of blame workers. 0 picks one per CPU.",
    )
    stop_at: str | None = Field(
        default=None,
        description="Don't look further back than this revision when blaming files.",
    )

    @field_validator("context_lines", "max_concurrency")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Must be >= 0, got {v}")
        return v

    @field_validator("max_file_size")
    @classmethod
    def validate_max_file_size(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError(f"Must be >= 0, got {v}")
        return v


class OutputConfig(BaseModel):
    """Result output configuration.

    Env vars:
        PRBLAME__OUTPUT__PROGRESS: Show a progress bar on interactive terminals
        PRBLAME__OUTPUT__FORMAT: text or json
    """

    progress: bool = Field(
        default=True,
        description="Show a progress bar. Always hidden when stderr is not a TTY "
        "or when verbose logging is enabled.",
    )
    format: Literal["text", "json"] = Field(
        default="text",
        description="text prints '<count>\\t<name> <email>' lines; json prints one array.",
    )


class PrBlameConfig(BaseModel):
    """Root configuration for prblame.

    All settings can be configured via:
    1. Environment variables: PRBLAME__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    attribution: AttributionConfig = Field(default_factory=AttributionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
