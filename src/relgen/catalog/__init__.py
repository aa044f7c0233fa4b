"""Catalog module - capability modules and the methods they install."""

from relgen.catalog.definitions import CATALOG_VERSION, inventory
from relgen.catalog.inventory import MethodInventory
from relgen.catalog.models import CapabilityModule, ModuleInventory

__all__ = [
    "CATALOG_VERSION",
    "CapabilityModule",
    "MethodInventory",
    "ModuleInventory",
    "inventory",
]
