"""Signature models - parameters, method signatures and verdicts.

Types are Sorbet type expressions kept as templates. Placeholders are
substituted per entity when a signature is bound:

- ``{model}``: the entity class
- ``{relation}``, ``{association_relation}``, ``{collection_proxy}``: its
  synthesized classes
- ``{self}``: the relation class of the flavor the method is declared on
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from relgen.core.errors import InternalError

UNTYPED = "T.untyped"
SELF_TYPE = "{self}"


class ParamKind(Enum):
    """Parameter kind, in declaration order."""

    POSITIONAL = "positional"
    REST = "rest"
    KEYWORD = "keyword"
    KEYWORD_REST = "keyword_rest"
    BLOCK = "block"


@dataclass(frozen=True, slots=True)
class Parameter:
    """One declared parameter."""

    name: str
    kind: ParamKind = ParamKind.POSITIONAL
    type: str = UNTYPED
    default: str | None = None

    def bind(self, bindings: TypeBindings, self_type: str | None = None) -> Parameter:
        return replace(self, type=bindings.resolve(self.type, self_type))


@dataclass(frozen=True, slots=True)
class MethodSignature:
    """A classifier verdict that declares a method.

    ``return_type`` of None declares a void method.
    """

    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None

    @property
    def is_self_typed(self) -> bool:
        """True when the signature depends on the enclosing relation flavor."""
        templates = [p.type for p in self.parameters]
        if self.return_type is not None:
            templates.append(self.return_type)
        return any(SELF_TYPE in t for t in templates)

    def bind(self, bindings: TypeBindings, self_type: str | None = None) -> MethodSignature:
        """Substitute every placeholder for one entity (and flavor)."""
        return MethodSignature(
            name=self.name,
            parameters=tuple(p.bind(bindings, self_type) for p in self.parameters),
            return_type=(
                None if self.return_type is None else bindings.resolve(self.return_type, self_type)
            ),
        )


@dataclass(frozen=True, slots=True)
class Skip:
    """A classifier verdict that declares nothing."""

    reason: str


Verdict = MethodSignature | Skip


@dataclass(frozen=True, slots=True)
class TypeBindings:
    """Concrete type names for one entity."""

    model: str
    relation: str
    association_relation: str
    collection_proxy: str

    def resolve(self, template: str, self_type: str | None = None) -> str:
        if "{" not in template:
            return template
        values = {
            "model": self.model,
            "relation": self.relation,
            "association_relation": self.association_relation,
            "collection_proxy": self.collection_proxy,
        }
        if self_type is not None:
            values["self"] = self_type
        try:
            return template.format_map(values)
        except KeyError as e:
            raise InternalError.unexpected(
                f"unbound placeholder {e} in type '{template}'", model=self.model
            ) from e
