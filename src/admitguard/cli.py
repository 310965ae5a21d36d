"""Typer CLI entrypoint for the admission evaluator."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import load_yaml
from .container import AdmissionContainer, create_container
from .core import Assessment
from .core.engine import parse_reference_date
from .core.risk import derive_risk_tier
from .ledger import AuditLedger, PersistenceError
from .logging import configure_logging
from .schemas import ApplicationRecord, RiskTier
from .schemas.config import load_config

app = typer.Typer(help="Candidate admission screening CLI.")


@app.callback()
def main_options(
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    configure_logging(log_level)


@app.command()
def evaluate(
    record: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Application record JSON path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    as_of: Optional[str] = typer.Option(None, help="Reference date (ISO) for age and graduation checks."),
) -> None:
    """Evaluate a record and print errors, exceptions and risk."""
    container = _build_container(config)
    application = _load_record(record)
    reference_date = _parse_as_of(as_of) if as_of else None
    engine = container.rule_engine()
    assessment = engine.assess(application, container.policy(), as_of=reference_date)
    _echo_json(_assessment_payload(assessment))


@app.command()
def submit(
    record: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Application record JSON path."),
    ledger_dir: Path = typer.Option(..., file_okay=False, help="Directory holding the audit ledger."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
) -> None:
    """Submit a record; accepted submissions are appended to the ledger."""
    container = _build_container(config, ledger_dir=ledger_dir)
    session = container.session(record=_load_record(record))
    _hydrate(container)

    entry = session.submit()
    if entry is None:
        _echo_json(_assessment_payload(session.assessment))
        raise typer.Exit(code=1)
    _echo_json(entry.model_dump(mode="json", by_alias=True))


@app.command()
def history(
    ledger_dir: Path = typer.Option(..., file_okay=False, help="Directory holding the audit ledger."),
    risk: Optional[RiskTier] = typer.Option(None, help="Only show entries with this risk level."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
) -> None:
    """Print audit entries, newest first."""
    container = _build_container(config, ledger_dir=ledger_dir)
    ledger = _hydrate(container)
    entries = ledger.filter(risk_level=risk) if risk else list(ledger.entries)
    _echo_json([entry.model_dump(mode="json", by_alias=True) for entry in entries])


@app.command()
def clear(
    ledger_dir: Path = typer.Option(..., file_okay=False, help="Directory holding the audit ledger."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
) -> None:
    """Discard the whole audit ledger."""
    container = _build_container(config, ledger_dir=ledger_dir)
    session = container.session()
    _hydrate(container)
    cleared = session.clear_ledger(
        lambda: yes or typer.confirm("Are you sure you want to clear the entire audit log?")
    )
    typer.echo("Audit log cleared." if cleared else "Audit log left unchanged.")


@app.command()
def risk(
    exceptions: int = typer.Option(..., min=0, help="Number of soft-rule exceptions."),
    threshold: Optional[float] = typer.Option(None, help="High-risk threshold (defaults to policy)."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
) -> None:
    """Preview the risk tier for an exception count."""
    if threshold is None:
        threshold = _build_container(config).policy().high_risk_threshold
    typer.echo(derive_risk_tier(exceptions, threshold).value)


def _build_container(config: Path | None, *, ledger_dir: Path | None = None) -> AdmissionContainer:
    settings: dict[str, Any] = {}
    if config:
        try:
            settings = load_config(load_yaml(config)).to_settings()
        except (ValueError, ValidationError, yaml.YAMLError) as exc:
            raise typer.BadParameter(str(exc), param_hint="config") from exc
    if ledger_dir is not None:
        settings.setdefault("ledger", {})["directory"] = str(ledger_dir)
    return create_container(settings=settings)


def _hydrate(container: AdmissionContainer) -> AuditLedger:
    ledger = container.ledger()
    try:
        ledger.load()
    except PersistenceError as exc:
        typer.secho(f"Cannot load audit ledger: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc
    return ledger


def _parse_as_of(value: str) -> date:
    try:
        return parse_reference_date(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="as_of") from exc


def _load_record(path: Path) -> ApplicationRecord:
    try:
        return ApplicationRecord.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="record") from exc


def _assessment_payload(assessment: Assessment) -> dict[str, Any]:
    return {
        "hard_errors": assessment.result.hard_errors,
        "exceptions": assessment.result.exceptions,
        "exception_count": assessment.exception_count,
        "can_submit": assessment.can_submit,
        "missing_fields": assessment.missing_fields,
        "risk_tier": assessment.risk_tier.value,
        "high_risk": assessment.high_risk,
    }


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
