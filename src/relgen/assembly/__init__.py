"""Assembly module - per-entity declaration trees."""

from relgen.assembly.assembler import ContainerNames, DeclarationAssembler
from relgen.assembly.models import (
    ConstantDecl,
    ContainerDecl,
    ContainerKind,
    DeclarationTree,
    MethodDecl,
    MixinDecl,
)

__all__ = [
    "ConstantDecl",
    "ContainerDecl",
    "ContainerKind",
    "ContainerNames",
    "DeclarationAssembler",
    "DeclarationTree",
    "MethodDecl",
    "MixinDecl",
]
