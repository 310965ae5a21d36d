"""Caller-side admission workflow: edit, re-assess, submit, audit."""

from __future__ import annotations

from typing import Any, Callable

import structlog

from .core import Assessment, RuleEngine
from .ledger import AuditLedger, DeserializationError
from .schemas import (
    ApplicationRecord,
    AuditEntry,
    PolicyConfig,
    PolicyEditor,
    ScoreMode,
)


class AdmissionSession:
    """Drives one admission form against a rule engine and audit ledger.

    Every mutation re-runs the engine so ``assessment`` always reflects the
    current record under the committed policy.
    """

    def __init__(
        self,
        *,
        engine: RuleEngine,
        ledger: AuditLedger,
        policy_editor: PolicyEditor | None = None,
        record: ApplicationRecord | None = None,
    ) -> None:
        self._engine = engine
        self._ledger = ledger
        self._policy = policy_editor or PolicyEditor()
        self._record = record or ApplicationRecord()
        self._logger = structlog.get_logger(__name__)
        self._assessment = self._reassess()

    @property
    def record(self) -> ApplicationRecord:
        return self._record

    @property
    def policy(self) -> PolicyEditor:
        return self._policy

    @property
    def ledger(self) -> AuditLedger:
        return self._ledger

    @property
    def assessment(self) -> Assessment:
        return self._assessment

    def hydrate(self, *, fallback_to_empty: bool = False) -> tuple[AuditEntry, ...]:
        """Load the ledger from its store, optionally starting empty on bad data."""
        try:
            return self._ledger.load()
        except DeserializationError as exc:
            if not fallback_to_empty:
                raise
            self._logger.warning("ledger.load_failed", error=str(exc), fallback="empty")
            return ()

    def update(self, **changes: Any) -> Assessment:
        record = self._record.model_copy()
        for name, value in changes.items():
            if name not in ApplicationRecord.model_fields:
                raise KeyError(f"Unknown application field: {name!r}")
            setattr(record, name, value)
        self._record = record
        return self._refresh()

    def toggle_score_mode(self) -> Assessment:
        mode = ScoreMode.CGPA if self._record.score_mode is ScoreMode.PERCENTAGE else ScoreMode.PERCENTAGE
        return self.update(score_mode=mode)

    def toggle_offer_letter(self) -> Assessment:
        return self.update(offer_letter_sent=not self._record.offer_letter_sent)

    def reset(self) -> Assessment:
        self._record = ApplicationRecord()
        return self._refresh()

    def stage_policy(self, key: str, value: Any) -> PolicyConfig:
        return self._policy.stage(key, value)

    def commit_policy(self) -> Assessment:
        committed = self._policy.commit()
        self._logger.info("policy.committed", **committed.model_dump())
        return self._refresh()

    def cancel_policy(self) -> PolicyConfig:
        return self._policy.cancel()

    def submit(self) -> AuditEntry | None:
        """Record the current application, or return None when it is blocked.

        A blocked submission leaves the record untouched for further edits.
        """
        assessment = self._refresh()
        if not assessment.can_submit:
            self._logger.warning(
                "submission.blocked",
                hard_errors=sorted(assessment.result.hard_errors),
                missing_fields=assessment.missing_fields,
            )
            return None

        entry = self._ledger.record(
            record=self._record,
            result=assessment.result,
            policy=self._policy.committed,
        )
        self._logger.info(
            "submission.accepted",
            entry_id=entry.id,
            risk_level=entry.risk_level.value,
            exception_count=entry.exception_count,
        )
        self.reset()
        return entry

    def clear_ledger(self, confirm: Callable[[], bool]) -> bool:
        """Clear the audit ledger only when ``confirm`` agrees."""
        if not confirm():
            return False
        self._ledger.clear()
        return True

    def _refresh(self) -> Assessment:
        self._assessment = self._reassess()
        return self._assessment

    def _reassess(self) -> Assessment:
        return self._engine.assess(self._record, self._policy.committed)
