"""Pydantic schema definitions for records, policy and audit entries."""

from __future__ import annotations

from .application import (
    REQUIRED_FIELDS,
    ApplicationRecord,
    InterviewStatus,
    Qualification,
    ScoreMode,
)
from .audit import AuditEntry, RiskTier
from .policy import PolicyConfig, PolicyEditor

__all__ = [
    "ApplicationRecord",
    "AuditEntry",
    "InterviewStatus",
    "PolicyConfig",
    "PolicyEditor",
    "Qualification",
    "REQUIRED_FIELDS",
    "RiskTier",
    "ScoreMode",
]
