"""Terminal feedback for relgen commands.

Everything here writes to stderr through one rich console, so stdout stays
free for ``--json`` output::

    status("Loaded 12 models from models.yaml")

    for tree in progress(trees, desc="Assembling"):
        ...

    with task("Writing 12 files to sorbet/rbi/relations"):
        write_files(files, out_dir)
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable, Iterator, Sized
from contextlib import contextmanager
from typing import TypeVar

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from relgen.core.formatting import format_duration
from relgen.core.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

# Smaller runs finish before a bar is worth drawing.
_PROGRESS_THRESHOLD = 25

_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

# Process-wide, so log lines from worker threads are held back too.
_live_display = threading.Event()


def is_console_suppressed() -> bool:
    return _live_display.is_set()


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Hold back console log lines while a live display is drawing."""
    _live_display.set()
    try:
        yield
    finally:
        _live_display.clear()


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print one status line to stderr."""
    _console.print(" " * indent + _STYLES.get(style, "") + message, highlight=False)


def progress(
    iterable: Iterable[T],
    *,
    desc: str = "Processing",
    total: int | None = None,
    unit: str = "entities",
) -> Iterator[T]:
    """Yield from ``iterable``, with a transient bar on a terminal for larger runs."""
    if total is None and isinstance(iterable, Sized):
        total = len(iterable)

    if not _console.is_terminal or total is None or total < _PROGRESS_THRESHOLD:
        log.debug("progress", desc=desc, total=total)
        yield from iterable
        return

    columns = (
        TextColumn("  {task.description}"),
        BarColumn(bar_width=30),
        MofNCompleteColumn(),
        TextColumn(unit),
    )
    with suppress_console_logs(), Progress(*columns, console=_console, transient=True) as bar:
        task_id = bar.add_task(desc, total=total)
        for item in iterable:
            yield item
            bar.advance(task_id)


@contextmanager
def task(name: str) -> Iterator[None]:
    """Time a named step and report how it ended.

    Prints ``✓ <name> (0.2s)`` on success and ``✗ <name> failed: <error>``
    when the block raises. The exception is re-raised.
    """
    started = time.perf_counter()
    try:
        yield
    except Exception as e:
        elapsed = time.perf_counter() - started
        status(f"{name} failed: {e}", style="error")
        log.error("task_failed", task=name, elapsed_s=round(elapsed, 3), error=str(e))
        raise
    elapsed = time.perf_counter() - started
    status(f"{name} ({format_duration(elapsed)})", style="success")
    log.debug("task_done", task=name, elapsed_s=round(elapsed, 3))
