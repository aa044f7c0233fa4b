"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (RELGEN__SECTION__KEY)
3. Project YAML (relgen.yaml)
4. Global YAML (~/.config/relgen/config.yaml)
5. Built-in defaults (this file)

Examples:
    RELGEN__LOGGING__LEVEL=DEBUG
    RELGEN__GENERATION__ASSOCIATION_METHODS=common
    RELGEN__GENERATION__WORKERS=4
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from relgen.config.constants import (
    ASSOCIATION_RELATION_SUPERCLASS,
    COLLECTION_PROXY_SUPERCLASS,
    RELATION_SUPERCLASS,
    TYPED_SIGILS,
    WORKERS_MAX,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
AssociationPlacement = Literal["per_class", "common"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

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
        RELGEN__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every assembled entity and shadowed scope.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class GenerationConfig(BaseModel):
    """Declaration generation behavior.

    Env vars:
        RELGEN__GENERATION__ASSOCIATION_METHODS: per_class or common
        RELGEN__GENERATION__WORKERS: Parallel assembly workers
        RELGEN__GENERATION__TYPED_SIGIL: Sorbet sigil written to each file
    """

    association_methods: AssociationPlacement = Field(
        default="per_class",
        description="Where association-only methods are declared. 'per_class' puts them on "
        "the association relation and collection proxy classes; 'common' puts them on the "
        "shared module, which the entity class also extends.",
    )
    workers: int = Field(
        default=1,
        description="Parallel assembly workers. Entities are independent, output order is fixed.",
    )
    typed_sigil: str = Field(
        default="strong",
        description="Sorbet strictness sigil for generated files.",
    )

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if not (1 <= v <= WORKERS_MAX):
            raise ValueError(f"workers must be 1-{WORKERS_MAX}, got {v}")
        return v

    @field_validator("typed_sigil")
    @classmethod
    def validate_sigil(cls, v: str) -> str:
        if v not in TYPED_SIGILS:
            raise ValueError(f"typed_sigil must be one of {', '.join(TYPED_SIGILS)}, got {v}")
        return v


class NamingConfig(BaseModel):
    """Names of the synthesized containers.

    Templates are formatted with ``model`` set to the entity's qualified name.
    """

    common_module: str = "{model}::CommonRelationMethods"
    relation_module: str = "{model}::GeneratedRelationMethods"
    association_relation_module: str = "{model}::GeneratedAssociationRelationMethods"
    relation_class: str = "{model}::PrivateRelation"
    association_relation_class: str = "{model}::PrivateAssociationRelation"
    collection_proxy_class: str = "{model}::PrivateCollectionProxy"

    relation_superclass: str = RELATION_SUPERCLASS
    association_relation_superclass: str = ASSOCIATION_RELATION_SUPERCLASS
    collection_proxy_superclass: str = COLLECTION_PROXY_SUPERCLASS

    @field_validator(
        "common_module",
        "relation_module",
        "association_relation_module",
        "relation_class",
        "association_relation_class",
        "collection_proxy_class",
    )
    @classmethod
    def validate_template(cls, v: str) -> str:
        if "{model}" not in v:
            raise ValueError(f"Name template must contain '{{model}}': {v}")
        return v


class RelgenConfig(BaseModel):
    """Root configuration for relgen."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
