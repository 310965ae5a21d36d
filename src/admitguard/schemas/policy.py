"""Admin-tunable policy thresholds and the pending edit buffer."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class PolicyConfig(BaseModel):
    """Thresholds governing soft-rule evaluation."""

    min_age: float = 18
    max_future_grad_years: float = 2
    min_percentage: float = 60
    min_cgpa: float = 6.0
    min_screening_score: float = 40
    high_risk_threshold: float = 2

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_numeric(cls, value: Any) -> float:
        # Anything that does not read as a finite number becomes 0.
        if isinstance(value, bool):
            return float(value)
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0.0
        return number if math.isfinite(number) else 0.0


class PolicyEditor:
    """Holds the committed policy alongside a pending, editable copy.

    Evaluation always reads ``committed``; ``stage`` only touches the
    pending buffer until ``commit`` copies it over.
    """

    def __init__(self, initial: PolicyConfig | None = None) -> None:
        self._committed = initial or PolicyConfig()
        self._pending = self._committed.model_dump()

    @property
    def committed(self) -> PolicyConfig:
        return self._committed

    @property
    def pending(self) -> PolicyConfig:
        return PolicyConfig.model_validate(self._pending)

    @property
    def is_dirty(self) -> bool:
        return self.pending != self._committed

    def stage(self, key: str, value: Any) -> PolicyConfig:
        if key not in PolicyConfig.model_fields:
            raise KeyError(f"Unknown policy setting: {key!r}")
        self._pending[key] = value
        return self.pending

    def commit(self) -> PolicyConfig:
        self._committed = self.pending
        self._pending = self._committed.model_dump()
        return self._committed

    def cancel(self) -> PolicyConfig:
        self._pending = self._committed.model_dump()
        return self._committed
