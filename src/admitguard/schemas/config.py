"""Pydantic configuration schema for YAML input."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .policy import PolicyConfig


class _PatternOverride(BaseModel):
    pattern: str | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("pattern")
    @classmethod
    def _compiles(cls, value: str | None) -> str | None:
        if value is None:
            return value
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regular expression {value!r}: {exc}") from exc
        return value


class FullNameOverride(BaseModel):
    min_length: int | None = Field(default=None, ge=1, strict=True)

    model_config = ConfigDict(extra="forbid")


class EmailOverride(_PatternOverride):
    pass


class PhoneOverride(_PatternOverride):
    message: str | None = None


class AadhaarOverride(BaseModel):
    length: int | None = Field(default=None, ge=1, strict=True)

    model_config = ConfigDict(extra="forbid")


class RuleConfig(BaseModel):
    full_name: FullNameOverride | None = None
    email: EmailOverride | None = None
    phone: PhoneOverride | None = None
    aadhaar: AadhaarOverride | None = None

    model_config = ConfigDict(extra="forbid")


class LedgerConfig(BaseModel):
    directory: str | None = None
    key: str | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    rules: RuleConfig = Field(default_factory=RuleConfig)
    ledger: LedgerConfig = Field(default_factory=LedgerConfig)

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {"policy": self.policy.model_dump()}
        rule_settings = self.rules.model_dump(exclude_none=True)
        if rule_settings:
            settings["rules"] = rule_settings
        ledger_settings = self.ledger.model_dump(exclude_none=True)
        if ledger_settings:
            settings["ledger"] = ledger_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
