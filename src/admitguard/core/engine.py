"""Rule engine turning (record, policy) into errors, exceptions and risk."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Iterable

import pendulum
from pendulum.parsing.exceptions import ParserError

from ..schemas import ApplicationRecord, InterviewStatus, PolicyConfig, RiskTier
from .risk import derive_risk_tier, is_high_risk
from .rules import default_rules
from .rules.base import RuleContext


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Field-keyed hard errors and soft exceptions for one record."""

    hard_errors: dict[str, str] = field(default_factory=dict)
    exceptions: dict[str, str] = field(default_factory=dict)

    @property
    def exception_count(self) -> int:
        return len(self.exceptions)

    @property
    def is_admissible(self) -> bool:
        return not self.hard_errors


@dataclass(frozen=True, slots=True)
class Assessment:
    """Everything a caller displays, derived from a single evaluation."""

    result: EvaluationResult
    can_submit: bool
    missing_fields: list[str]
    risk_tier: RiskTier
    high_risk: bool

    @property
    def exception_count(self) -> int:
        return self.result.exception_count


class RuleEngine:
    """Runs hard and soft rules against an application record.

    The engine holds no policy; thresholds arrive with every call so the
    same instance can serve committed and pending policies alike.
    """

    def __init__(
        self,
        rules: Iterable[Any] | None = None,
        *,
        today_provider: Callable[[], date] | None = None,
    ) -> None:
        self._rules = list(rules) if rules is not None else default_rules()
        self._today_provider = today_provider or pendulum.today

    def evaluate(
        self,
        record: ApplicationRecord,
        policy: PolicyConfig,
        *,
        as_of: date | str | None = None,
    ) -> EvaluationResult:
        context = RuleContext(policy=policy, today=self._resolve_today(as_of))
        hard_errors: dict[str, str] = {}
        exceptions: dict[str, str] = {}

        for rule in self._rules:
            message = rule.evaluate(record, context)
            if not message:
                continue
            target = self._target_for(rule, hard_errors, exceptions)
            # First rule to report on a field wins.
            target.setdefault(rule.field, message)

        return EvaluationResult(hard_errors=hard_errors, exceptions=exceptions)

    def assess(
        self,
        record: ApplicationRecord,
        policy: PolicyConfig,
        *,
        as_of: date | str | None = None,
    ) -> Assessment:
        result = self.evaluate(record, policy, as_of=as_of)
        missing = record.missing_required()
        return Assessment(
            result=result,
            can_submit=can_submit(record, result),
            missing_fields=missing,
            risk_tier=derive_risk_tier(result.exception_count, policy.high_risk_threshold),
            high_risk=is_high_risk(result.exception_count, policy.high_risk_threshold),
        )

    @staticmethod
    def _target_for(
        rule: Any,
        hard_errors: dict[str, str],
        exceptions: dict[str, str],
    ) -> dict[str, str]:
        kind = getattr(rule, "kind", None)
        if kind == "hard":
            return hard_errors
        if kind == "soft":
            return exceptions
        raise ValueError(f"Rule {type(rule).__name__} has unknown kind {kind!r}.")

    def _resolve_today(self, as_of: date | str | None) -> date:
        if as_of is None:
            return _as_date(self._today_provider())
        return parse_reference_date(as_of)


def can_submit(record: ApplicationRecord, result: EvaluationResult) -> bool:
    """Submission gate derived from an existing evaluation of ``record``."""
    return (
        result.is_admissible
        and not record.missing_required()
        and record.interview_status is not InterviewStatus.REJECTED
    )


def parse_reference_date(value: date | str) -> date:
    """Normalise a date, datetime or ISO string into a calendar date."""
    if isinstance(value, date):
        return _as_date(value)
    try:
        return _as_date(pendulum.parse(str(value)))
    except (ValueError, TypeError, ParserError) as exc:
        raise ValueError(f"Invalid reference date: {value!r}") from exc


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Cannot use {type(value).__name__} as a reference date")
