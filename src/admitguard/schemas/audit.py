"""Audit ledger entry schema."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RiskTier(str, Enum):
    """Risk classification derived from the exception count."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AuditEntry(BaseModel):
    """Immutable record of an accepted submission.

    Serialises with the camelCase keys of the stored ledger format.
    """

    id: str
    full_name: str
    email: str
    interview_status: str = ""
    exception_count: int = Field(ge=0)
    risk_level: RiskTier
    timestamp: str

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
