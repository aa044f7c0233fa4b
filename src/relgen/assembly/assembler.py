"""Declaration assembler - builds one entity's relation declarations.

For an entity ``Post`` the default naming yields::

    Post                                  extends Common and the relation module
    Post::CommonRelationMethods           finders, aggregates, creation family
    Post::GeneratedRelationMethods        chainable methods returning PrivateRelation
    Post::GeneratedAssociationRelationMethods
                                          chainable methods returning PrivateAssociationRelation
    Post::PrivateRelation                 < ActiveRecord::Relation
    Post::PrivateAssociationRelation      < ActiveRecord::AssociationRelation
    Post::PrivateCollectionProxy          < ActiveRecord::Associations::CollectionProxy

Catalog classification happens once per assembler. Per entity only type
binding and scope accumulation remain, so one assembler serves any number of
worker threads.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from relgen.assembly.models import (
    ConstantDecl,
    ContainerDecl,
    ContainerKind,
    DeclarationTree,
    MethodDecl,
    MixinDecl,
)
from relgen.catalog.inventory import MethodInventory
from relgen.catalog.models import CapabilityModule
from relgen.config.constants import (
    ELEMENT_CONSTANT,
    ELEMENT_CONSTANT_VALUE,
    PERSISTENCE_ROOT,
)
from relgen.config.models import AssociationPlacement, NamingConfig
from relgen.core.logging import get_logger
from relgen.entities.models import EntityClass, ScopeSource
from relgen.scopes.accumulator import accumulate_scopes
from relgen.signatures.classifier import SignatureClassifier
from relgen.signatures.models import MethodSignature, TypeBindings

log = get_logger(__name__)

# Modules whose methods every relation flavor shares.
RELATION_MODULES = (
    CapabilityModule.QUERY_METHODS,
    CapabilityModule.SPAWN_METHODS,
    CapabilityModule.FINDER_METHODS,
    CapabilityModule.CALCULATIONS,
    CapabilityModule.RELATION,
)


@dataclass(frozen=True, slots=True)
class ContainerNames:
    """Qualified names of one entity's synthesized containers."""

    model: str
    common_module: str
    relation_module: str
    association_relation_module: str
    relation_class: str
    association_relation_class: str
    collection_proxy_class: str

    @classmethod
    def for_model(cls, model: str, naming: NamingConfig) -> ContainerNames:
        return cls(
            model=model,
            common_module=naming.common_module.format(model=model),
            relation_module=naming.relation_module.format(model=model),
            association_relation_module=naming.association_relation_module.format(model=model),
            relation_class=naming.relation_class.format(model=model),
            association_relation_class=naming.association_relation_class.format(model=model),
            collection_proxy_class=naming.collection_proxy_class.format(model=model),
        )

    @property
    def bindings(self) -> TypeBindings:
        return TypeBindings(
            model=self.model,
            relation=self.relation_class,
            association_relation=self.association_relation_class,
            collection_proxy=self.collection_proxy_class,
        )


class _SignatureSet:
    """Signatures keyed by declared name; the first declaration of a name wins."""

    def __init__(self) -> None:
        self._by_name: dict[str, MethodSignature] = {}

    def add(self, signature: MethodSignature) -> None:
        self._by_name.setdefault(signature.name, signature)

    def extend(self, signatures: Iterable[MethodSignature]) -> None:
        for signature in signatures:
            self.add(signature)

    def __iter__(self) -> Iterator[MethodSignature]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)


class DeclarationAssembler:
    """Assembles the declaration tree of one entity at a time.

    Args:
        inventory: Capability-module catalog.
        classifier: Signature classifier for catalog and scope names.
        naming: Container name templates and superclasses.
        association_methods: ``per_class`` declares association-only methods on
            the association relation and collection proxy classes; ``common``
            declares them on the shared module.
    """

    def __init__(
        self,
        inventory: MethodInventory,
        classifier: SignatureClassifier,
        *,
        naming: NamingConfig | None = None,
        association_methods: AssociationPlacement = "per_class",
    ) -> None:
        self.inventory = inventory
        self.classifier = classifier
        self.naming = naming or NamingConfig()
        self.association_methods = association_methods

        self._common = _SignatureSet()
        self._flavored = _SignatureSet()
        self._association = _SignatureSet()
        self._proxy = _SignatureSet()

        for module in RELATION_MODULES:
            self._place(module, inventory.get(module).methods, self._common)

        association_target = self._common if association_methods == "common" else self._association
        proxy_target = self._common if association_methods == "common" else self._proxy
        self._place(
            CapabilityModule.ASSOCIATION_RELATION,
            inventory.additions(CapabilityModule.ASSOCIATION_RELATION),
            association_target,
        )
        self._place(
            CapabilityModule.COLLECTION_PROXY,
            inventory.additions(CapabilityModule.COLLECTION_PROXY),
            proxy_target,
        )

        log.debug(
            "catalog_loaded",
            version=inventory.version,
            modules=len(inventory.modules()),
            common=len(self._common),
            flavored=len(self._flavored),
            association=len(self._association),
            proxy=len(self._proxy),
            association_methods=association_methods,
        )

    def _place(self, module: CapabilityModule, names: Iterable[str], target: _SignatureSet) -> None:
        for name in names:
            verdict = self.classifier.classify(name, module)
            if not isinstance(verdict, MethodSignature):
                continue
            if verdict.is_self_typed:
                self._flavored.add(verdict)
            else:
                target.add(verdict)

    def names_for(self, entity: EntityClass) -> ContainerNames:
        return ContainerNames.for_model(entity.name, self.naming)

    def assemble(
        self, entity: EntityClass, source: ScopeSource, *, root: str = PERSISTENCE_ROOT
    ) -> DeclarationTree:
        """Build the declaration tree for ``entity``.

        ``root`` is the persistence root the entity graph was resolved against.
        Scope accumulation stops below it.

        Raises:
            UnsupportedEntityError: The entity's chain does not reach the root.
        """
        names = self.names_for(entity)
        bindings = names.bindings
        scopes = accumulate_scopes(entity, source, root)

        flavored = _SignatureSet()
        flavored.extend(self._flavored)
        flavored.extend(self.classifier.classify_scope(scope) for scope in scopes)

        def bound(
            signatures: Iterable[MethodSignature], self_type: str | None = None
        ) -> tuple[MethodDecl, ...]:
            decls = {
                s.name: MethodDecl.from_signature(s.bind(bindings, self_type)) for s in signatures
            }
            return tuple(decls[name] for name in sorted(decls))

        common_methods = bound(self._common)
        association_methods = bound(self._association)
        proxy_methods = bound(self._proxy)
        elem = (
            ConstantDecl(
                name=ELEMENT_CONSTANT,
                value=ELEMENT_CONSTANT_VALUE.format(model=entity.name),
            ),
        )

        def includes(*targets: str) -> tuple[MixinDecl, ...]:
            return tuple(MixinDecl("include", t) for t in targets)

        containers = [
            ContainerDecl(
                kind=ContainerKind.CLASS,
                name=entity.name,
                mixins=(
                    MixinDecl("extend", names.common_module),
                    MixinDecl("extend", names.relation_module),
                ),
            ),
            ContainerDecl(
                kind=ContainerKind.MODULE,
                name=names.common_module,
                methods=common_methods,
            ),
            ContainerDecl(
                kind=ContainerKind.MODULE,
                name=names.relation_module,
                methods=bound(flavored, names.relation_class),
            ),
            ContainerDecl(
                kind=ContainerKind.MODULE,
                name=names.association_relation_module,
                methods=bound(flavored, names.association_relation_class),
            ),
            ContainerDecl(
                kind=ContainerKind.CLASS,
                name=names.relation_class,
                superclass=self.naming.relation_superclass,
                mixins=includes(names.common_module, names.relation_module),
                constants=elem,
            ),
            ContainerDecl(
                kind=ContainerKind.CLASS,
                name=names.association_relation_class,
                superclass=self.naming.association_relation_superclass,
                mixins=includes(names.common_module, names.association_relation_module),
                constants=elem,
                methods=association_methods,
            ),
            ContainerDecl(
                kind=ContainerKind.CLASS,
                name=names.collection_proxy_class,
                superclass=self.naming.collection_proxy_superclass,
                mixins=includes(names.common_module, names.association_relation_module),
                constants=elem,
                methods=_merge(association_methods, proxy_methods),
            ),
        ]
        containers.sort(key=lambda c: c.name)

        log.debug(
            "entity_assembled",
            entity=entity.name,
            scopes=len(scopes),
            methods=sum(len(c.methods) for c in containers),
        )
        return DeclarationTree(entity=entity.name, containers=tuple(containers))


def _merge(*groups: tuple[MethodDecl, ...]) -> tuple[MethodDecl, ...]:
    merged: dict[str, MethodDecl] = {}
    for group in groups:
        for decl in group:
            merged.setdefault(decl.name, decl)
    return tuple(merged[name] for name in sorted(merged))
