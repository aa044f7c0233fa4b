"""Render module - declaration trees to RBI text."""

from relgen.render.rbi import RbiRenderer, Renderer

__all__ = ["RbiRenderer", "Renderer"]
