"""Generation module - assemble and render declarations for an entity graph."""

from relgen.generation.ops import GeneratedFile, GenerationOps, generate_declarations

__all__ = ["GeneratedFile", "GenerationOps", "generate_declarations"]
