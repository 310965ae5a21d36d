"""Rule implementations for the admission engine."""

from .eligibility import InterviewStatusRule, OfferLetterRule, QualificationRule
from .identity import AadhaarRule, EmailRule, FullNameRule, PhoneRule
from .policy import AcademicScoreRule, GraduationYearRule, MinimumAgeRule, ScreeningScoreRule


def default_rules() -> list:
    """Hard rules first, then policy-driven soft rules."""
    return [
        FullNameRule(),
        EmailRule(),
        PhoneRule(),
        QualificationRule(),
        AadhaarRule(),
        OfferLetterRule(),
        InterviewStatusRule(),
        MinimumAgeRule(),
        GraduationYearRule(),
        AcademicScoreRule(),
        ScreeningScoreRule(),
    ]


__all__ = [
    "AadhaarRule",
    "AcademicScoreRule",
    "EmailRule",
    "FullNameRule",
    "GraduationYearRule",
    "InterviewStatusRule",
    "MinimumAgeRule",
    "OfferLetterRule",
    "PhoneRule",
    "QualificationRule",
    "ScreeningScoreRule",
    "default_rules",
]
