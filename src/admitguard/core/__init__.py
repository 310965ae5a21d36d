"""Core admission evaluation components."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..schemas import ApplicationRecord
from .engine import Assessment, EvaluationResult, RuleEngine, can_submit
from .risk import derive_risk_tier, is_high_risk
from .rules.base import RuleContext, RuleKind


@runtime_checkable
class Rule(Protocol):
    """Rule contract: inspect one field and report a message or nothing."""

    field: str
    kind: RuleKind

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        """Return a message when the record violates this rule."""


__all__ = [
    "Assessment",
    "EvaluationResult",
    "Rule",
    "RuleContext",
    "RuleEngine",
    "can_submit",
    "derive_risk_tier",
    "is_high_risk",
]
