"""Generation operations - assemble and render every concrete entity.

Assembly is pure, so entities fan out over a thread pool. Results are always
returned in entity-name order regardless of completion order.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from relgen.assembly.assembler import DeclarationAssembler
from relgen.assembly.models import DeclarationTree
from relgen.catalog.definitions import inventory as default_inventory
from relgen.catalog.inventory import MethodInventory
from relgen.config.constants import PERSISTENCE_ROOT, RBI_EXTENSION
from relgen.config.models import RelgenConfig
from relgen.core.formatting import underscore
from relgen.core.progress import progress
from relgen.entities.graph import EntityGraph
from relgen.entities.models import EntityClass, ScopeSource
from relgen.render.rbi import RbiRenderer, Renderer
from relgen.signatures.classifier import SignatureClassifier


@dataclass
class GeneratedFile:
    """Rendered declarations for one entity."""

    path: str  # Relative to the output directory
    entity: str
    content: str


def generate_declarations(
    entities: Iterable[EntityClass],
    source: ScopeSource,
    assembler: DeclarationAssembler,
    *,
    workers: int = 1,
    root: str = PERSISTENCE_ROOT,
) -> list[DeclarationTree]:
    """Assemble a tree per entity, in entity-name order.

    Each worker task runs in a copy of the caller's context, so the run ID
    set by the caller stays on events logged during assembly.
    """
    ordered = sorted(entities, key=lambda e: e.name)
    if workers <= 1 or len(ordered) <= 1:
        return [
            assembler.assemble(entity, source, root=root)
            for entity in progress(ordered, desc="Assembling")
        ]
    # A Context can only be entered by one thread at a time.
    contexts = [contextvars.copy_context() for _ in ordered]
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="relgen-assemble") as pool:
        # map preserves input order
        results = pool.map(
            lambda ctx, entity: ctx.run(assembler.assemble, entity, source, root=root),
            contexts,
            ordered,
        )
        return list(progress(results, desc="Assembling", total=len(ordered)))


class GenerationOps:
    """Declaration generation for a resolved entity graph."""

    def __init__(
        self,
        assembler: DeclarationAssembler,
        renderer: Renderer | None = None,
        *,
        workers: int = 1,
    ) -> None:
        self.assembler = assembler
        self.renderer = renderer or RbiRenderer()
        self.workers = workers

    @classmethod
    def from_config(
        cls,
        config: RelgenConfig,
        *,
        inventory: MethodInventory | None = None,
        classifier: SignatureClassifier | None = None,
    ) -> GenerationOps:
        generation = config.generation
        assembler = DeclarationAssembler(
            inventory or default_inventory,
            classifier or SignatureClassifier(),
            naming=config.naming,
            association_methods=generation.association_methods,
        )
        return cls(
            assembler,
            RbiRenderer(typed_sigil=generation.typed_sigil),
            workers=generation.workers,
        )

    def assemble(
        self, graph: EntityGraph, only: Sequence[str] | None = None
    ) -> list[DeclarationTree]:
        """Declaration trees for the graph's concrete entities.

        Scopes are accumulated up to the graph's own root.

        Raises:
            UnsupportedEntityError: An entity cannot be resolved to the root.
        """
        return generate_declarations(
            graph.concrete(only),
            graph,
            self.assembler,
            workers=self.workers,
            root=graph.root,
        )

    def generate(
        self, graph: EntityGraph, only: Sequence[str] | None = None
    ) -> list[GeneratedFile]:
        """Rendered files for the graph's concrete entities."""
        return [
            GeneratedFile(
                path=underscore(tree.entity) + RBI_EXTENSION,
                entity=tree.entity,
                content=self.renderer.render(tree),
            )
            for tree in self.assemble(graph, only)
        ]
