"""Signature classifier - maps (method name, capability module) to a verdict."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from relgen.catalog.models import CapabilityModule
from relgen.core.errors import ClassificationGapError, InternalError
from relgen.signatures.definitions import RULE_BOOK, SCOPE_RULE
from relgen.signatures.models import MethodSignature, Verdict
from relgen.signatures.rules import Rule

if TYPE_CHECKING:
    from relgen.catalog.inventory import MethodInventory


@dataclass(frozen=True, slots=True)
class Decision:
    """A verdict together with the rule that produced it."""

    module: CapabilityModule
    name: str
    rule: Rule
    verdict: Verdict


@dataclass
class CoverageReport:
    """Result of classifying every name in an inventory."""

    decisions: list[Decision] = field(default_factory=list)
    gaps: list[tuple[str, str]] = field(default_factory=list)
    ambiguities: list[tuple[str, str, list[str]]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.gaps and not self.ambiguities

    def raise_for_problems(self) -> None:
        """Raise on the first class of problem found."""
        if self.gaps:
            raise ClassificationGapError.for_names(self.gaps)
        if self.ambiguities:
            listed = ", ".join(
                f"{module}:{name} ({' / '.join(labels)})"
                for module, name, labels in self.ambiguities
            )
            raise InternalError.unexpected(f"ambiguous classification for {listed}")


class SignatureClassifier:
    """Evaluates a module's rules top-down; the first matching rule decides."""

    def __init__(
        self, rule_book: Mapping[CapabilityModule, tuple[Rule, ...]] | None = None
    ) -> None:
        self._rule_book = dict(RULE_BOOK if rule_book is None else rule_book)

    def rules_for(self, module: CapabilityModule) -> tuple[Rule, ...]:
        return self._rule_book.get(module, ())

    def matching_rules(self, name: str, module: CapabilityModule) -> list[Rule]:
        """Non-fallback rules that match ``name``. More than one is a table defect."""
        return [r for r in self.rules_for(module) if not r.is_fallback and r.matches(name)]

    def decide(self, name: str, module: CapabilityModule) -> Decision:
        """Classify ``name`` and report which rule decided it.

        Raises:
            ClassificationGapError: No rule matches and the module has no default.
        """
        for rule in self.rules_for(module):
            if rule.matches(name):
                return Decision(module=module, name=name, rule=rule, verdict=rule.decide(name))
        raise ClassificationGapError.for_names([(module.name, name)])

    def classify(self, name: str, module: CapabilityModule) -> Verdict:
        return self.decide(name, module).verdict

    def classify_scope(self, name: str) -> MethodSignature:
        """Signature for a user-declared named scope."""
        verdict = SCOPE_RULE.decide(name)
        if not isinstance(verdict, MethodSignature):
            raise InternalError.unexpected(f"scope rule skipped '{name}'", scope=name)
        return verdict

    def verify(self, inventory: MethodInventory) -> CoverageReport:
        """Classify every catalogued name, collecting gaps and ambiguous matches."""
        report = CoverageReport()
        for entry in inventory:
            module = entry.module
            for name in entry.methods:
                matched = self.matching_rules(name, module)
                if len(matched) > 1:
                    report.ambiguities.append((module.name, name, [r.label for r in matched]))
                try:
                    report.decisions.append(self.decide(name, module))
                except ClassificationGapError:
                    report.gaps.append((module.name, name))
        return report
