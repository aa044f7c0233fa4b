"""Scopes module - named scopes inherited along the ancestor chain."""

from relgen.scopes.accumulator import accumulate_scopes

__all__ = ["accumulate_scopes"]
