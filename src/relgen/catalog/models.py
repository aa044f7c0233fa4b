"""Catalog models - capability modules and their method inventories."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum


class CapabilityModule(Enum):
    """Framework modules that install methods on relation types.

    Values are the framework's own constant names.
    """

    QUERY_METHODS = "ActiveRecord::QueryMethods"
    SPAWN_METHODS = "ActiveRecord::SpawnMethods"
    FINDER_METHODS = "ActiveRecord::FinderMethods"
    CALCULATIONS = "ActiveRecord::Calculations"
    RELATION = "ActiveRecord::Relation"
    ASSOCIATION_RELATION = "ActiveRecord::AssociationRelation"
    COLLECTION_PROXY = "ActiveRecord::Associations::CollectionProxy"

    @classmethod
    def parse(cls, value: str) -> CapabilityModule:
        """Look up a module by member name or framework constant name."""
        for member in cls:
            if value in (member.name, member.name.lower(), member.value):
                return member
        raise ValueError(f"Unknown capability module: {value}")


@dataclass(frozen=True, slots=True)
class ModuleInventory:
    """Instance methods one capability module defines directly.

    ``siblings`` are the modules this one is diffed against when isolating
    what it adds, e.g. collection-proxy methods not already present on the
    association relation.
    """

    module: CapabilityModule
    methods: tuple[str, ...]
    siblings: tuple[CapabilityModule, ...] = ()

    def __post_init__(self) -> None:
        dupes = sorted(name for name, count in Counter(self.methods).items() if count > 1)
        if dupes:
            raise ValueError(f"{self.module.value} lists methods twice: {', '.join(dupes)}")

    def __contains__(self, name: object) -> bool:
        return name in self.methods

    def __len__(self) -> int:
        return len(self.methods)
