"""Soft rules driven by the admin policy thresholds.

Each rule only fires when its source field is filled in and never blocks
submission; the message always restates the threshold that was crossed.
"""

from __future__ import annotations

from datetime import date

from ...schemas import ApplicationRecord, ScoreMode
from .base import RuleContext, format_threshold


def age_on(birth_date: date, today: date) -> int:
    """Whole years between ``birth_date`` and ``today``."""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


class MinimumAgeRule:
    field = "dob"
    kind = "soft"

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if record.dob is None:
            return None
        min_age = context.policy.min_age
        if age_on(record.dob, context.today) < min_age:
            return f"Candidate is under {format_threshold(min_age)} years old (Exception)"
        return None


class GraduationYearRule:
    field = "graduation_year"
    kind = "soft"

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if record.graduation_year is None:
            return None
        latest = context.today.year + context.policy.max_future_grad_years
        if record.graduation_year > latest:
            return f"Graduation year is beyond {format_threshold(latest)} (Exception)"
        return None


class AcademicScoreRule:
    """Percentage and CGPA are checked against separate minimums."""

    field = "score"
    kind = "soft"

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if record.score is None:
            return None
        policy = context.policy
        if record.score_mode is ScoreMode.PERCENTAGE:
            if record.score < policy.min_percentage:
                return f"Percentage is below {format_threshold(policy.min_percentage)}% (Exception)"
        elif record.score < policy.min_cgpa:
            return f"CGPA is below {format_threshold(policy.min_cgpa, min_decimals=1)} (Exception)"
        return None


class ScreeningScoreRule:
    field = "screening_score"
    kind = "soft"

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if record.screening_score is None:
            return None
        minimum = context.policy.min_screening_score
        if record.screening_score < minimum:
            return f"Screening score is below {format_threshold(minimum)} (Exception)"
        return None
