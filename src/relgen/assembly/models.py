"""Declaration tree models.

One tree per entity. Nodes are immutable and never shared between trees.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from relgen.core.errors import InternalError
from relgen.signatures.models import MethodSignature, Parameter


class ContainerKind(Enum):
    MODULE = "module"
    CLASS = "class"


@dataclass(frozen=True, slots=True)
class MethodDecl:
    """A fully bound method declaration."""

    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None

    @classmethod
    def from_signature(cls, signature: MethodSignature) -> MethodDecl:
        if signature.is_self_typed:
            raise InternalError.unexpected(
                f"method '{signature.name}' still has an unbound self type"
            )
        return cls(
            name=signature.name,
            parameters=signature.parameters,
            return_type=signature.return_type,
        )


@dataclass(frozen=True, slots=True)
class MixinDecl:
    kind: Literal["include", "extend"]
    target: str


@dataclass(frozen=True, slots=True)
class ConstantDecl:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class ContainerDecl:
    """A module or class with its mixins, constants and methods.

    A class with no superclass reopens an existing class.
    """

    kind: ContainerKind
    name: str
    superclass: str | None = None
    mixins: tuple[MixinDecl, ...] = ()
    constants: tuple[ConstantDecl, ...] = ()
    methods: tuple[MethodDecl, ...] = ()

    def method(self, name: str) -> MethodDecl | None:
        for decl in self.methods:
            if decl.name == name:
                return decl
        return None

    @property
    def method_names(self) -> list[str]:
        return [m.name for m in self.methods]


@dataclass(frozen=True, slots=True)
class DeclarationTree:
    """Every declaration generated for one entity, in canonical order."""

    entity: str
    containers: tuple[ContainerDecl, ...]

    def container(self, name: str) -> ContainerDecl:
        for decl in self.containers:
            if decl.name == name:
                return decl
        raise KeyError(name)

    def __len__(self) -> int:
        return len(self.containers)
