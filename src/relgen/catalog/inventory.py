"""Method inventory - read-only queries over the capability-module catalog."""

from __future__ import annotations

from collections.abc import Iterator

from relgen.catalog.models import CapabilityModule, ModuleInventory
from relgen.core.errors import CatalogError


class MethodInventory:
    """Registry of capability-module inventories.

    Populated once from the static catalog and shared read-only by every
    assembly worker.
    """

    def __init__(self, version: str = "unversioned") -> None:
        self.version = version
        self._modules: dict[CapabilityModule, ModuleInventory] = {}

    def register(self, inventory: ModuleInventory) -> None:
        """Register a module's inventory. Each module may be registered once."""
        if inventory.module in self._modules:
            raise CatalogError.duplicate_module(inventory.module.value)
        self._modules[inventory.module] = inventory

    def get(self, module: CapabilityModule) -> ModuleInventory:
        """Get a module's inventory."""
        try:
            return self._modules[module]
        except KeyError:
            raise CatalogError.unknown_module(module.value) from None

    def modules(self) -> list[CapabilityModule]:
        """Registered modules, in registration order."""
        return list(self._modules)

    def __iter__(self) -> Iterator[ModuleInventory]:
        return iter(self._modules.values())

    def __contains__(self, module: object) -> bool:
        return module in self._modules

    def instance_methods(self, module: CapabilityModule) -> frozenset[str]:
        """Names the module defines directly."""
        return frozenset(self.get(module).methods)

    def additions(self, module: CapabilityModule, *baseline: CapabilityModule) -> list[str]:
        """Names ``module`` defines that no baseline module defines, in catalog order.

        With no explicit baseline, the module's declared siblings are used.
        """
        inventory = self.get(module)
        against = baseline or inventory.siblings
        known: set[str] = set()
        for other in against:
            known |= self.instance_methods(other)
        return [name for name in inventory.methods if name not in known]

    def total_methods(self) -> int:
        return sum(len(inv) for inv in self._modules.values())
