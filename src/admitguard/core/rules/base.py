"""Shared rule types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

from ...schemas import PolicyConfig

RuleKind = Literal["hard", "soft"]


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Inputs every rule may consult besides the record itself."""

    policy: PolicyConfig
    today: date


def format_threshold(value: float, *, min_decimals: int = 0) -> str:
    """Render a threshold exactly, without a trailing ".0" on whole numbers.

    ``min_decimals`` pads whole numbers, e.g. a CGPA of 6 shows as "6.0".
    """
    number = float(value)
    if number.is_integer():
        return f"{number:.{min_decimals}f}" if min_decimals else str(int(number))
    return repr(number)
