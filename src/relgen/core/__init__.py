"""Core module exports."""

from relgen.core.errors import (
    CatalogError,
    ClassificationGapError,
    ConfigError,
    ErrorCode,
    InternalError,
    RelgenError,
    UnsupportedEntityError,
)
from relgen.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from relgen.core.progress import progress, status, task

__all__ = [
    # Errors
    "CatalogError",
    "ClassificationGapError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "RelgenError",
    "UnsupportedEntityError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "progress",
    "status",
    "task",
]
