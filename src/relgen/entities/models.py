"""Entity models - persistent-entity classes as the generator sees them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class EntityClass:
    """A persistent-entity class.

    ``ancestors`` is ordered nearest first and ends at the persistence root.
    ``scopes`` are the named scopes declared at this class's own level.
    """

    name: str
    ancestors: tuple[str, ...]
    abstract: bool = False
    scopes: tuple[str, ...] = ()

    @property
    def superclass(self) -> str | None:
        return self.ancestors[0] if self.ancestors else None

    @property
    def chain(self) -> tuple[str, ...]:
        """The class itself followed by its ancestors."""
        return (self.name, *self.ancestors)


@runtime_checkable
class ScopeSource(Protocol):
    """Answers which named scopes a class declares at its own level."""

    def scopes_at(self, class_name: str) -> Sequence[str]: ...
