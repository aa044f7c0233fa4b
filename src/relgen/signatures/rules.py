"""Classification rules - ordered matcher objects.

Each rule belongs to a tier. Within a context the classifier evaluates
rules in tier order and the first match decides. The rule tables are built so
that at most one non-fallback rule matches any catalogued name.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import IntEnum

from relgen.signatures.models import MethodSignature, Parameter, Skip, Verdict


class RuleTier(IntEnum):
    """Rule priority, lowest value evaluated first."""

    OVERRIDE = 1
    PATTERN_EXCLUSION = 2
    EXCLUSION_LIST = 3
    DEFAULT = 4


class Rule(ABC):
    """A matcher that decides the verdict for the names it matches."""

    tier: RuleTier
    label: str

    @abstractmethod
    def matches(self, name: str) -> bool: ...

    @abstractmethod
    def decide(self, name: str) -> Verdict: ...

    @property
    def is_fallback(self) -> bool:
        return self.tier is RuleTier.DEFAULT


@dataclass(frozen=True)
class Override(Rule):
    """Fixed signature for an exact set of names.

    ``declared_name`` renames the declaration, so several source names can
    collapse into one declared method.
    """

    names: frozenset[str]
    parameters: tuple[Parameter, ...] = ()
    return_type: str | None = None
    declared_name: str | None = None
    label: str = "override"
    tier: RuleTier = field(default=RuleTier.OVERRIDE, init=False)

    def matches(self, name: str) -> bool:
        return name in self.names

    def decide(self, name: str) -> Verdict:
        return MethodSignature(
            name=self.declared_name or name,
            parameters=self.parameters,
            return_type=self.return_type,
        )


@dataclass(frozen=True)
class PatternOverride(Rule):
    """Signature computed from the name, for names matching a pattern."""

    pattern: re.Pattern[str]
    build: Callable[[str], MethodSignature]
    label: str = "pattern override"
    tier: RuleTier = field(default=RuleTier.OVERRIDE, init=False)

    def matches(self, name: str) -> bool:
        return self.pattern.search(name) is not None

    def decide(self, name: str) -> Verdict:
        return self.build(name)


@dataclass(frozen=True)
class SkipPattern(Rule):
    """Skip names matching a pattern."""

    pattern: re.Pattern[str]
    label: str = "internal name"
    tier: RuleTier = field(default=RuleTier.PATTERN_EXCLUSION, init=False)

    def matches(self, name: str) -> bool:
        return self.pattern.search(name) is not None

    def decide(self, name: str) -> Verdict:
        return Skip(reason=self.label)


@dataclass(frozen=True)
class SkipList(Rule):
    """Skip an exact set of names."""

    names: frozenset[str]
    label: str = "excluded"
    tier: RuleTier = field(default=RuleTier.EXCLUSION_LIST, init=False)

    def matches(self, name: str) -> bool:
        return name in self.names

    def decide(self, name: str) -> Verdict:
        return Skip(reason=self.label)


@dataclass(frozen=True)
class Fallback(Rule):
    """Signature for every name no other rule decides."""

    parameters: tuple[Parameter, ...]
    return_type: str | None
    label: str = "default"
    tier: RuleTier = field(default=RuleTier.DEFAULT, init=False)

    def matches(self, name: str) -> bool:  # noqa: ARG002
        return True

    def decide(self, name: str) -> Verdict:
        return MethodSignature(name=name, parameters=self.parameters, return_type=self.return_type)


def override(
    names: Iterable[str] | str,
    *parameters: Parameter,
    returns: str | None,
    declared_name: str | None = None,
    label: str = "override",
) -> Override:
    """Shorthand for an Override over one name or several."""
    name_set = frozenset([names] if isinstance(names, str) else names)
    return Override(
        names=name_set,
        parameters=parameters,
        return_type=returns,
        declared_name=declared_name,
        label=label,
    )


def ordered(rules: Iterable[Rule]) -> tuple[Rule, ...]:
    """Sort rules by tier, keeping table order within a tier and dropping repeats."""
    return tuple(sorted(dict.fromkeys(rules), key=lambda r: r.tier))
