"""Entity graph - resolves ancestor chains from manifest entries."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from relgen.core.errors import UnsupportedEntityError
from relgen.core.logging import get_logger
from relgen.entities.manifest import EntityManifest, EntitySpec
from relgen.entities.models import EntityClass

log = get_logger(__name__)


class EntityGraph:
    """Entity classes by name, with ancestor chains resolved up to the root.

    Implements ScopeSource: the scopes declared at a given class level.
    """

    def __init__(self, specs: Iterable[EntitySpec], *, root: str) -> None:
        self.root = root
        self._specs: dict[str, EntitySpec] = {}
        for spec in specs:
            if spec.name in self._specs or spec.name == root:
                raise UnsupportedEntityError.duplicate(spec.name)
            self._specs[spec.name] = spec
        self._resolved: dict[str, EntityClass] = {}

    @classmethod
    def from_manifest(cls, manifest: EntityManifest) -> EntityGraph:
        return cls(manifest.entities, root=manifest.root)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    def names(self) -> list[str]:
        return sorted(self._specs)

    def scopes_at(self, class_name: str) -> Sequence[str]:
        spec = self._specs.get(class_name)
        return tuple(spec.scopes) if spec else ()

    def resolve(self, name: str) -> EntityClass:
        """Build the EntityClass for ``name``.

        Raises:
            UnsupportedEntityError: Unknown entity, unknown superclass, cycle,
                or a chain that never reaches the root.
        """
        if name in self._resolved:
            return self._resolved[name]
        spec = self._specs.get(name)
        if spec is None:
            raise UnsupportedEntityError.not_found(name)

        ancestors: list[str] = []
        current = spec
        # Each step visits a distinct manifest entry, so the walk is bounded.
        for _ in range(len(self._specs) + 1):
            parent = current.superclass or self.root
            if parent == self.root:
                ancestors.append(parent)
                break
            if parent == name or parent in ancestors:
                self._reject(name, "cycle")
                raise UnsupportedEntityError.cycle(name, [name, *ancestors, parent])
            next_spec = self._specs.get(parent)
            if next_spec is None:
                self._reject(name, "unknown_superclass", superclass=parent)
                raise UnsupportedEntityError.unknown_superclass(name, parent)
            ancestors.append(parent)
            current = next_spec
        else:
            self._reject(name, "root_unreachable")
            raise UnsupportedEntityError.root_unreachable(name, self.root)

        entity = EntityClass(
            name=spec.name,
            ancestors=tuple(ancestors),
            abstract=spec.abstract,
            scopes=tuple(spec.scopes),
        )
        self._resolved[name] = entity
        return entity

    def concrete(self, only: Iterable[str] | None = None) -> list[EntityClass]:
        """Resolved non-abstract entities, sorted by name.

        Args:
            only: Restrict to these names (each must exist).
        """
        names = self.names() if only is None else sorted(set(only))
        entities = [self.resolve(n) for n in names]
        return [e for e in entities if not e.abstract]

    def _reject(self, name: str, reason: str, **details: str) -> None:
        log.warning("entity_rejected", entity=name, reason=reason, root=self.root, **details)
