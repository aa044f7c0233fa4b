"""Signatures module - per-method signature classification."""

from relgen.signatures.classifier import CoverageReport, Decision, SignatureClassifier
from relgen.signatures.models import (
    SELF_TYPE,
    UNTYPED,
    MethodSignature,
    Parameter,
    ParamKind,
    Skip,
    TypeBindings,
    Verdict,
)
from relgen.signatures.rules import RuleTier

__all__ = [
    "SELF_TYPE",
    "UNTYPED",
    "CoverageReport",
    "Decision",
    "MethodSignature",
    "ParamKind",
    "Parameter",
    "RuleTier",
    "SignatureClassifier",
    "Skip",
    "TypeBindings",
    "Verdict",
]
