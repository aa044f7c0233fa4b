"""Config module exports."""

from relgen.config.loader import load_config, read_yaml
from relgen.config.models import (
    GenerationConfig,
    LoggingConfig,
    NamingConfig,
    RelgenConfig,
)

__all__ = [
    "load_config",
    "read_yaml",
    "GenerationConfig",
    "LoggingConfig",
    "NamingConfig",
    "RelgenConfig",
]
