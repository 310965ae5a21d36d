"""Hard rules on candidate identity and contact fields."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ...schemas import ApplicationRecord
from .base import RuleContext

_DIGIT = re.compile(r"[0-9]")


@dataclass
class FullNameConfig:
    """Configuration for the full name rule."""

    min_length: int = 2


class FullNameRule:
    """Name must be present, long enough and free of digits."""

    field = "full_name"
    kind = "hard"

    def __init__(self, *, config: FullNameConfig | None = None) -> None:
        self._config = config or FullNameConfig()

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        name = record.full_name.strip()
        if not name:
            return "Full Name is required"
        if len(name) < self._config.min_length:
            return f"Minimum {self._config.min_length} characters required"
        if _DIGIT.search(record.full_name):
            return "Numbers are not allowed in name"
        return None


@dataclass
class EmailConfig:
    """Configuration for the email rule."""

    pattern: str = r"[^\s@]+@[^\s@]+\.[^\s@]+"


class EmailRule:
    """Email must be present and look like ``user@domain.tld``."""

    field = "email"
    kind = "hard"

    def __init__(self, *, config: EmailConfig | None = None) -> None:
        self._config = config or EmailConfig()
        self._pattern = re.compile(self._config.pattern)

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if not record.email:
            return "Email is required"
        if not self._pattern.fullmatch(record.email):
            return "Invalid email format (e.g. user@domain.com)"
        return None


@dataclass
class PhoneConfig:
    """Configuration for the mobile number rule."""

    pattern: str = r"[6-9][0-9]{9}"
    message: str = "Must be 10 digits starting with 6, 7, 8, or 9"


class PhoneRule:
    """Indian mobile number: ten digits with a 6-9 leading digit."""

    field = "phone"
    kind = "hard"

    def __init__(self, *, config: PhoneConfig | None = None) -> None:
        self._config = config or PhoneConfig()
        self._pattern = re.compile(self._config.pattern)

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if not record.phone:
            return "Phone number is required"
        if not self._pattern.fullmatch(record.phone):
            return self._config.message
        return None


@dataclass
class AadhaarConfig:
    """Configuration for the Aadhaar identifier rule."""

    length: int = 12


class AadhaarRule:
    """Aadhaar number must be exactly ``length`` digits."""

    field = "aadhaar_number"
    kind = "hard"

    def __init__(self, *, config: AadhaarConfig | None = None) -> None:
        self._config = config or AadhaarConfig()
        self._pattern = re.compile(rf"[0-9]{{{self._config.length}}}")

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if not record.aadhaar_number:
            return "Aadhaar Number is required"
        if not self._pattern.fullmatch(record.aadhaar_number):
            return f"Must be exactly {self._config.length} digits (numbers only)"
        return None
