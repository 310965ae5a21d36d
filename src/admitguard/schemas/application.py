"""Candidate application record schema."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class Qualification(str, Enum):
    """Accepted qualifying degrees."""

    B_TECH = "B.Tech"
    B_E = "B.E."
    B_SC = "B.Sc"
    BCA = "BCA"
    M_TECH = "M.Tech"
    M_SC = "M.Sc"
    MCA = "MCA"
    MBA = "MBA"


class ScoreMode(str, Enum):
    """Scale the academic score is expressed in."""

    PERCENTAGE = "Percentage"
    CGPA = "CGPA"


class InterviewStatus(str, Enum):
    """Outcome of the candidate interview."""

    CLEARED = "Cleared"
    WAITLISTED = "Waitlisted"
    REJECTED = "Rejected"


REQUIRED_FIELDS: tuple[str, ...] = (
    "full_name",
    "email",
    "phone",
    "qualification",
    "aadhaar_number",
)


class ApplicationRecord(BaseModel):
    """Snapshot of a candidate submission as edited by the caller.

    Optional fields accept blank strings, which mean "not filled in".
    Field names may be given in snake_case or in the camelCase used by
    form payloads.
    """

    full_name: str = ""
    email: str = ""
    phone: str = ""
    dob: date | None = None
    qualification: Qualification | None = None
    graduation_year: int | None = None
    score: float | None = None
    score_mode: ScoreMode = ScoreMode.PERCENTAGE
    screening_score: float | None = None
    interview_status: InterviewStatus | None = None
    aadhaar_number: str = ""
    offer_letter_sent: bool = False

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    @field_validator(
        "dob",
        "qualification",
        "graduation_year",
        "score",
        "screening_score",
        "interview_status",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_required(self) -> list[str]:
        """Return required fields that are still empty."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]
