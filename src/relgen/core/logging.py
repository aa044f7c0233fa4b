"""Structured logging for relgen runs.

Events go through structlog into stdlib handlers, one handler per configured
output, each with its own renderer and level. ``relgen generate`` starts a
run with ``set_run_id()``; the ID is attached to every event of the run,
including those logged by assembly worker threads.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from relgen.config.models import LoggingConfig, LogOutputConfig

_run_id: ContextVar[str | None] = ContextVar("relgen_run_id", default=None)


def set_run_id(run_id: str | None = None) -> str:
    """Start a run, generating a 12-character ID when none is given."""
    run_id = run_id or uuid4().hex[:12]
    _run_id.set(run_id)
    return run_id


def get_run_id() -> str | None:
    return _run_id.get()


def clear_run_id() -> None:
    _run_id.set(None)


def _add_run_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    run_id = get_run_id()
    if run_id is not None:
        event_dict.setdefault("run_id", run_id)
    return event_dict


def _level(name: str | None, default: int) -> int:
    if name is None:
        return default
    return logging.getLevelNamesMapping().get(name.upper(), default)


class ConsoleSuppressingFilter(logging.Filter):
    """Drops console records while a progress bar is drawing."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from relgen.core.progress import is_console_suppressed

        return not is_console_suppressed()


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        _add_run_id,  # type: ignore[list-item]
    ]


def _handler(output: LogOutputConfig) -> logging.Handler:
    handler: logging.Handler
    match output.destination:
        case "stderr":
            handler = logging.StreamHandler(sys.stderr)
            handler.addFilter(ConsoleSuppressingFilter())
        case "stdout":
            handler = logging.StreamHandler(sys.stdout)
            handler.addFilter(ConsoleSuppressingFilter())
        case destination:
            path = Path(destination)
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    return handler


def _formatter(
    output: LogOutputConfig, chain: list[structlog.types.Processor]
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        colors = output.destination == "stderr" and sys.stderr.isatty()
        renderer = structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=chain)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog events to the configured outputs.

    Without ``config`` a single stderr output is set up from ``json_format``
    and ``level``. Calling again replaces the previous handlers.
    """
    from relgen.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,  # type: ignore[arg-type]
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level(config.level, logging.INFO)
    chain = _processors()
    structlog.configure(
        processors=[*chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Loggers stay uncached so module-level loggers see reconfiguration.
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(root_level)

    for output in config.outputs:
        handler = _handler(output)
        handler.setLevel(_level(output.level, root_level))
        handler.setFormatter(_formatter(output, chain))
        root.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """A lazy logger that stamps ``logger=name`` on its events.

    Safe at module level: configuration is looked up on each call, so
    ``configure_logging`` applies to loggers created at import.
    """
    if name:
        return structlog.get_logger(logger=name)  # type: ignore[no-any-return]
    return structlog.get_logger()  # type: ignore[no-any-return]
