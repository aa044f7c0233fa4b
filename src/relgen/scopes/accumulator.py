"""Scope accumulation along an entity's ancestor chain."""

from __future__ import annotations

from relgen.core.errors import UnsupportedEntityError
from relgen.core.logging import get_logger
from relgen.entities.models import EntityClass, ScopeSource

log = get_logger(__name__)


def accumulate_scopes(entity: EntityClass, source: ScopeSource, root: str) -> tuple[str, ...]:
    """Collect the named scopes visible on ``entity``.

    Walks from the class itself up to, but not including, ``root``. Abstract
    intermediate classes contribute their scopes like any other level. When a
    name is declared at several levels the nearest declaration is kept and the
    outer one is logged as shadowed.

    Raises:
        UnsupportedEntityError: The chain never reaches ``root``.
    """
    seen: dict[str, str] = {}
    for level in entity.chain:
        if level == root:
            break
        for name in source.scopes_at(level):
            if name in seen:
                if seen[name] != level:
                    log.debug(
                        "scope_shadowed",
                        entity=entity.name,
                        scope=name,
                        kept=seen[name],
                        shadowed=level,
                    )
                continue
            seen[name] = level
    else:
        raise UnsupportedEntityError.root_unreachable(entity.name, root)
    return tuple(seen)
