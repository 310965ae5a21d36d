"""Risk tier derivation from soft-rule exception counts."""

from __future__ import annotations

from ..schemas import RiskTier


def derive_risk_tier(exception_count: int, high_risk_threshold: float) -> RiskTier:
    """Classify a submission by how many soft rules it deviates from.

    Zero exceptions is Low, up to and including the threshold is Medium,
    anything above it is High.
    """
    if exception_count == 0:
        return RiskTier.LOW
    if exception_count <= high_risk_threshold:
        return RiskTier.MEDIUM
    return RiskTier.HIGH


def is_high_risk(exception_count: int, high_risk_threshold: float) -> bool:
    """Whether the live "High Risk" banner should show for this count."""
    return exception_count > 0 and exception_count >= high_risk_threshold
