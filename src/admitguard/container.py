"""Dependency injection container for the admission evaluator."""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import RuleEngine
from .core.rules import (
    AadhaarRule,
    AcademicScoreRule,
    EmailRule,
    FullNameRule,
    GraduationYearRule,
    InterviewStatusRule,
    MinimumAgeRule,
    OfferLetterRule,
    PhoneRule,
    QualificationRule,
    ScreeningScoreRule,
)
from .core.rules.identity import AadhaarConfig, EmailConfig, FullNameConfig, PhoneConfig
from .ledger import DEFAULT_LEDGER_KEY, AuditLedger, FileStore, MemoryStore
from .schemas import PolicyConfig, PolicyEditor
from .schemas.config import RuleConfig
from .session import AdmissionSession


class AdmissionContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration(default={"ledger_key": DEFAULT_LEDGER_KEY})

    full_name_rule = providers.Singleton(FullNameRule)
    email_rule = providers.Singleton(EmailRule)
    phone_rule = providers.Singleton(PhoneRule)
    qualification_rule = providers.Singleton(QualificationRule)
    aadhaar_rule = providers.Singleton(AadhaarRule)
    offer_letter_rule = providers.Singleton(OfferLetterRule)
    interview_status_rule = providers.Singleton(InterviewStatusRule)
    minimum_age_rule = providers.Singleton(MinimumAgeRule)
    graduation_year_rule = providers.Singleton(GraduationYearRule)
    academic_score_rule = providers.Singleton(AcademicScoreRule)
    screening_score_rule = providers.Singleton(ScreeningScoreRule)

    rules = providers.List(
        full_name_rule,
        email_rule,
        phone_rule,
        qualification_rule,
        aadhaar_rule,
        offer_letter_rule,
        interview_status_rule,
        minimum_age_rule,
        graduation_year_rule,
        academic_score_rule,
        screening_score_rule,
    )

    rule_engine = providers.Singleton(RuleEngine, rules=rules)

    policy = providers.Singleton(PolicyConfig)

    ledger_store = providers.Singleton(MemoryStore)

    ledger = providers.Singleton(
        AuditLedger,
        store=ledger_store,
        key=config.ledger_key,
    )

    session = providers.Factory(
        AdmissionSession,
        engine=rule_engine,
        ledger=ledger,
        policy_editor=providers.Factory(PolicyEditor, initial=policy),
    )


def create_container(*, settings: dict | None = None) -> AdmissionContainer:
    """Instantiate container with optional overrides."""

    container = AdmissionContainer()

    if not settings or not isinstance(settings, dict):
        return container

    policy_settings = settings.get("policy") or {}
    if policy_settings:
        container.policy.override(
            providers.Singleton(PolicyConfig.model_validate, policy_settings)
        )

    ledger_settings = settings.get("ledger") or {}
    if ledger_settings.get("key"):
        container.config.ledger_key.from_value(ledger_settings["key"])
    if ledger_settings.get("directory"):
        container.ledger_store.override(
            providers.Singleton(FileStore, ledger_settings["directory"])
        )

    rule_settings = RuleConfig.model_validate(settings.get("rules") or {}).model_dump(exclude_none=True)

    if "full_name" in rule_settings:
        name_config = FullNameConfig(**rule_settings["full_name"])
        container.full_name_rule.override(
            providers.Singleton(FullNameRule, config=name_config)
        )

    if "email" in rule_settings:
        email_config = EmailConfig(**rule_settings["email"])
        container.email_rule.override(
            providers.Singleton(EmailRule, config=email_config)
        )

    if "phone" in rule_settings:
        phone_config = PhoneConfig(**rule_settings["phone"])
        container.phone_rule.override(
            providers.Singleton(PhoneRule, config=phone_config)
        )

    if "aadhaar" in rule_settings:
        aadhaar_config = AadhaarConfig(**rule_settings["aadhaar"])
        container.aadhaar_rule.override(
            providers.Singleton(AadhaarRule, config=aadhaar_config)
        )

    return container
