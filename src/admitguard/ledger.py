"""Append-only audit ledger and its persistence boundary."""

from __future__ import annotations

import os
import tempfile
import uuid
from pathlib import Path
from typing import Any, Callable, Iterator, Protocol, runtime_checkable

import pendulum
import structlog
from pydantic import TypeAdapter, ValidationError

from .core.engine import EvaluationResult
from .core.risk import derive_risk_tier
from .schemas import ApplicationRecord, AuditEntry, PolicyConfig, RiskTier

DEFAULT_LEDGER_KEY = "admitguard_audit_log"

_ENTRIES = TypeAdapter(list[AuditEntry])


class PersistenceError(RuntimeError):
    """Raised when the ledger store cannot be read or written."""


class DeserializationError(PersistenceError):
    """Raised when stored ledger data is present but malformed."""


@runtime_checkable
class LedgerStore(Protocol):
    """Key-value blob store holding the serialized ledger."""

    def get(self, key: str) -> str | None:
        """Return the stored blob, or None when nothing is stored."""

    def set(self, key: str, value: str) -> None:
        """Replace the stored blob."""


class MemoryStore:
    """Process-local store, handy for tests and embedding."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._blobs: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value


class FileStore:
    """Store each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PersistenceError(f"Cannot read ledger at {path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Cannot write ledger at {path}: {exc}") from exc


class AuditLedger:
    """Newest-first collection of audit entries backed by a store.

    Every mutation is persisted immediately; snapshots handed out are
    tuples, so earlier snapshots never change underneath a caller.
    """

    def __init__(
        self,
        store: LedgerStore,
        *,
        key: str = DEFAULT_LEDGER_KEY,
        clock: Callable[[], Any] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._store = store
        self._key = key
        self._clock = clock or pendulum.now
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._entries: tuple[AuditEntry, ...] = ()
        self._logger = structlog.get_logger(__name__)

    @property
    def entries(self) -> tuple[AuditEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AuditEntry]:
        return iter(self._entries)

    def load(self) -> tuple[AuditEntry, ...]:
        raw = self._store.get(self._key)
        if raw is None or not raw.strip():
            self._entries = ()
        else:
            try:
                self._entries = tuple(_ENTRIES.validate_json(raw))
            except ValidationError as exc:
                raise DeserializationError(f"Malformed ledger data under {self._key!r}: {exc}") from exc
        self._logger.info("ledger.loaded", key=self._key, entries=len(self._entries))
        return self._entries

    def save(self, entries: tuple[AuditEntry, ...] | list[AuditEntry]) -> tuple[AuditEntry, ...]:
        """Persist ``entries`` and adopt them as the current snapshot.

        The snapshot only changes once the store accepted the write.
        """
        snapshot = tuple(entries)
        payload = _ENTRIES.dump_json(list(snapshot), by_alias=True).decode("utf-8")
        self._store.set(self._key, payload)
        self._entries = snapshot
        return snapshot

    def append(self, entry: AuditEntry) -> tuple[AuditEntry, ...]:
        entries = self.save((entry, *self._entries))
        self._logger.info(
            "ledger.appended",
            entry_id=entry.id,
            risk_level=entry.risk_level.value,
            exception_count=entry.exception_count,
        )
        return entries

    def record(
        self,
        *,
        record: ApplicationRecord,
        result: EvaluationResult,
        policy: PolicyConfig,
    ) -> AuditEntry:
        """Create the audit entry for an accepted submission and append it."""
        exception_count = result.exception_count
        entry = AuditEntry(
            id=self._id_factory(),
            full_name=record.full_name,
            email=record.email,
            interview_status=record.interview_status.value if record.interview_status else "",
            exception_count=exception_count,
            risk_level=derive_risk_tier(exception_count, policy.high_risk_threshold),
            timestamp=self._timestamp(),
        )
        self.append(entry)
        return entry

    def clear(self) -> tuple[AuditEntry, ...]:
        """Drop every entry. Confirmation is the caller's responsibility."""
        discarded = len(self._entries)
        entries = self.save(())
        self._logger.info("ledger.cleared", key=self._key, discarded=discarded)
        return entries

    def get(self, entry_id: str) -> AuditEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def filter(
        self,
        *,
        risk_level: RiskTier | str | None = None,
        interview_status: str | None = None,
    ) -> list[AuditEntry]:
        tier = RiskTier(risk_level) if risk_level is not None else None
        return [
            entry
            for entry in self._entries
            if (tier is None or entry.risk_level is tier)
            and (interview_status is None or entry.interview_status == interview_status)
        ]

    def _timestamp(self) -> str:
        now = self._clock()
        if isinstance(now, pendulum.DateTime):
            return now.to_datetime_string()
        return str(now)
