"""relgen error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Catalog / classification
- 4xxx: Entity input
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Catalog (3xxx)
    CATALOG_UNKNOWN_MODULE = 3001
    CATALOG_DUPLICATE_MODULE = 3002
    CLASSIFICATION_GAP = 3101

    # Entity (4xxx)
    ENTITY_UNKNOWN_SUPERCLASS = 4001
    ENTITY_ROOT_UNREACHABLE = 4002
    ENTITY_CYCLE = 4003
    ENTITY_DUPLICATE = 4004
    ENTITY_NOT_FOUND = 4005

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class RelgenError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CLASSIFICATION_GAP')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(RelgenError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"File not found: {path}",
            details={"path": path},
        )


class CatalogError(RelgenError):
    """Errors in the capability-module catalog."""

    @classmethod
    def unknown_module(cls, module: str) -> "CatalogError":
        return cls(
            code=ErrorCode.CATALOG_UNKNOWN_MODULE,
            message=f"Capability module not in catalog: {module}",
            details={"module": module},
        )

    @classmethod
    def duplicate_module(cls, module: str) -> "CatalogError":
        return cls(
            code=ErrorCode.CATALOG_DUPLICATE_MODULE,
            message=f"Capability module registered twice: {module}",
            details={"module": module},
        )


class ClassificationGapError(RelgenError):
    """A method name reached no classification rule.

    This is a defect in the rule tables, never a condition to recover from.
    """

    @classmethod
    def for_names(cls, gaps: list[tuple[str, str]]) -> "ClassificationGapError":
        listed = ", ".join(f"{context}:{name}" for context, name in gaps)
        return cls(
            code=ErrorCode.CLASSIFICATION_GAP,
            message=f"No classification rule for {listed}",
            details={"gaps": [{"context": c, "name": n} for c, n in gaps]},
        )


class UnsupportedEntityError(RelgenError):
    """Entity input that cannot be assembled."""

    @classmethod
    def unknown_superclass(cls, entity: str, superclass: str) -> "UnsupportedEntityError":
        return cls(
            code=ErrorCode.ENTITY_UNKNOWN_SUPERCLASS,
            message=f"{entity} inherits from unknown class {superclass}",
            details={"entity": entity, "superclass": superclass},
        )

    @classmethod
    def root_unreachable(cls, entity: str, root: str) -> "UnsupportedEntityError":
        return cls(
            code=ErrorCode.ENTITY_ROOT_UNREACHABLE,
            message=f"Ancestor chain of {entity} does not end at {root}",
            details={"entity": entity, "root": root},
        )

    @classmethod
    def cycle(cls, entity: str, chain: list[str]) -> "UnsupportedEntityError":
        return cls(
            code=ErrorCode.ENTITY_CYCLE,
            message=f"Inheritance cycle at {entity}: {' < '.join(chain)}",
            details={"entity": entity, "chain": chain},
        )

    @classmethod
    def duplicate(cls, entity: str) -> "UnsupportedEntityError":
        return cls(
            code=ErrorCode.ENTITY_DUPLICATE,
            message=f"Entity declared more than once: {entity}",
            details={"entity": entity},
        )

    @classmethod
    def not_found(cls, entity: str) -> "UnsupportedEntityError":
        return cls(
            code=ErrorCode.ENTITY_NOT_FOUND,
            message=f"Entity not in manifest: {entity}",
            details={"entity": entity},
        )


class InternalError(RelgenError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
