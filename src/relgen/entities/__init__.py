"""Entities module - entity class descriptors and manifest input."""

from relgen.entities.graph import EntityGraph
from relgen.entities.manifest import EntityManifest, EntitySpec, load_manifest, parse_manifest
from relgen.entities.models import EntityClass, ScopeSource

__all__ = [
    "EntityClass",
    "EntityGraph",
    "EntityManifest",
    "EntitySpec",
    "ScopeSource",
    "load_manifest",
    "parse_manifest",
]
