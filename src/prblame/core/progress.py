"""User-facing progress feedback for CLI operations.

Design principles:
- Progress bar on stderr only, and only when stderr is a TTY
- Graceful degradation in non-TTY (CI, pipes): no bar, debug log lines instead
- Suppress console logging while the bar is live to avoid line collision

Usage::

    from prblame.core.progress import progress_bar, status

    with progress_bar(total=len(deltas), desc="Blaming") as advance:
        for _ in results:
            advance()

    status("No common ancestor", style="error")  # ✗ No common ancestor
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Console for output
_console = Console(stderr=True)

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

# Process-wide: worker threads log while the main thread owns the live bar
_suppress_console_logs = threading.Event()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return _suppress_console_logs.is_set()


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Context manager to suppress structlog console output.

    Used during progress bars to prevent log lines from colliding with
    Rich's live display. Logs are still written to file handlers.
    """
    _suppress_console_logs.set()
    try:
        yield
    finally:
        _suppress_console_logs.clear()


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from prblame.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    """Check if stderr is a TTY."""
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)

    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return "1 file" / "3 files" style counts."""
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


@contextmanager
def progress_bar(
    total: int,
    *,
    desc: str = "Processing",
    unit: str = "files",
    enabled: bool = True,
) -> Iterator[Callable[[], None]]:
    """Yield an ``advance()`` callable backed by a transient bar.

    The bar is shown only when ``enabled`` and stderr is a TTY; otherwise
    ``advance()`` just counts, and start/finish go to the debug log.
    """
    if enabled and _is_tty():
        with (
            suppress_console_logs(),
            Progress(
                SpinnerColumn(),
                TextColumn("{task.description}:"),
                BarColumn(bar_width=30, style="cyan", complete_style="cyan"),
                TaskProgressColumn(),
                TextColumn("{task.completed}/{task.total} {task.fields[unit]}"),
                TimeElapsedColumn(),
                console=_console,
                transient=True,
            ) as pbar,
        ):
            task_id = pbar.add_task(desc, total=total, unit=unit)

            def advance() -> None:
                pbar.advance(task_id)

            yield advance
    else:
        log = _get_logger()
        done = 0

        def count() -> None:
            nonlocal done
            done += 1

        log.debug("progress_start", desc=desc, total=total)
        yield count
        log.debug("progress_done", desc=desc, total=total, completed=done)
