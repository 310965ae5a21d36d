from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from admitguard.cli import app
from admitguard.ledger import DEFAULT_LEDGER_KEY


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


VALID_RECORD = {
    "fullName": "Priya Sharma",
    "email": "priya.sharma@example.com",
    "phone": "9988776655",
    "dob": "2000-03-14",
    "qualification": "B.E.",
    "graduationYear": "2022",
    "score": "58",
    "scoreMode": "Percentage",
    "screeningScore": "72",
    "interviewStatus": "Cleared",
    "aadhaarNumber": "432143214321",
    "offerLetterSent": True,
}


def test_cli_evaluate_prints_assessment(tmp_path: Path, runner: CliRunner) -> None:
    record_path = write_json(tmp_path / "record.json", VALID_RECORD)

    result = runner.invoke(app, ["evaluate", "--record", str(record_path), "--as-of", "2026-06-15"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["hard_errors"] == {}
    assert payload["exceptions"] == {"score": "Percentage is below 60% (Exception)"}
    assert payload["can_submit"] is True
    assert payload["risk_tier"] == "Medium"
    assert payload["high_risk"] is False


def test_cli_evaluate_uses_config_policy(tmp_path: Path, runner: CliRunner) -> None:
    record_path = write_json(tmp_path / "record.json", VALID_RECORD)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("policy:\n  min_percentage: 50\n", encoding="utf-8")

    result = runner.invoke(
        app,
        ["evaluate", "--record", str(record_path), "--config", str(config_path)],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["exceptions"] == {}
    assert payload["risk_tier"] == "Low"


def test_cli_evaluate_rejects_bad_config(tmp_path: Path, runner: CliRunner) -> None:
    record_path = write_json(tmp_path / "record.json", VALID_RECORD)
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- not\n- a mapping\n", encoding="utf-8")

    result = runner.invoke(
        app,
        ["evaluate", "--record", str(record_path), "--config", str(config_path)],
    )

    assert result.exit_code != 0


def test_cli_submit_history_and_clear(tmp_path: Path, runner: CliRunner) -> None:
    record_path = write_json(tmp_path / "record.json", VALID_RECORD)
    ledger_dir = tmp_path / "ledger"

    submitted = runner.invoke(
        app,
        ["submit", "--record", str(record_path), "--ledger-dir", str(ledger_dir)],
    )

    assert submitted.exit_code == 0, submitted.output
    entry = json.loads(submitted.stdout)
    assert entry["fullName"] == "Priya Sharma"
    assert entry["riskLevel"] == "Medium"
    assert entry["exceptionCount"] == 1
    assert (ledger_dir / f"{DEFAULT_LEDGER_KEY}.json").exists()

    listed = runner.invoke(app, ["history", "--ledger-dir", str(ledger_dir)])
    assert listed.exit_code == 0, listed.output
    assert [item["id"] for item in json.loads(listed.stdout)] == [entry["id"]]

    filtered = runner.invoke(app, ["history", "--ledger-dir", str(ledger_dir), "--risk", "High"])
    assert json.loads(filtered.stdout) == []

    declined = runner.invoke(app, ["clear", "--ledger-dir", str(ledger_dir)], input="n\n")
    assert declined.exit_code == 0
    assert "left unchanged" in declined.stdout

    confirmed = runner.invoke(app, ["clear", "--ledger-dir", str(ledger_dir)], input="y\n")
    assert confirmed.exit_code == 0
    assert "cleared" in confirmed.stdout

    emptied = runner.invoke(app, ["history", "--ledger-dir", str(ledger_dir)])
    assert json.loads(emptied.stdout) == []


def test_cli_submit_blocked_exits_nonzero(tmp_path: Path, runner: CliRunner) -> None:
    record_path = write_json(
        tmp_path / "record.json",
        {**VALID_RECORD, "interviewStatus": "Rejected"},
    )
    ledger_dir = tmp_path / "ledger"

    result = runner.invoke(
        app,
        ["submit", "--record", str(record_path), "--ledger-dir", str(ledger_dir)],
    )

    assert result.exit_code == 1
    assert "Rejected candidates cannot be enrolled" in result.output
    assert not (ledger_dir / f"{DEFAULT_LEDGER_KEY}.json").exists()


def test_cli_reports_corrupt_ledger(tmp_path: Path, runner: CliRunner) -> None:
    ledger_dir = tmp_path / "ledger"
    ledger_dir.mkdir()
    ledger_file = ledger_dir / f"{DEFAULT_LEDGER_KEY}.json"
    ledger_file.write_text("[{broken", encoding="utf-8")

    result = runner.invoke(app, ["clear", "--ledger-dir", str(ledger_dir), "--yes"])

    assert result.exit_code == 1
    assert ledger_file.read_text(encoding="utf-8") == "[{broken"


@pytest.mark.parametrize(
    ("exceptions", "threshold", "tier"),
    [("0", "2", "Low"), ("1", "2", "Medium"), ("3", "2", "High")],
)
def test_cli_risk_preview(runner: CliRunner, exceptions: str, threshold: str, tier: str) -> None:
    result = runner.invoke(app, ["risk", "--exceptions", exceptions, "--threshold", threshold])

    assert result.exit_code == 0, result.output
    assert result.stdout.strip() == tier


@pytest.mark.parametrize(
    "rules_yaml",
    [
        "rules:\n  email:\n    patern: 'x'\n",
        "rules:\n  phone:\n    pattern: '[0-9'\n",
        "rules:\n  full_name:\n    min_length: 'three'\n",
    ],
)
def test_cli_rejects_bad_rule_override(tmp_path: Path, runner: CliRunner, rules_yaml: str) -> None:
    record_path = write_json(tmp_path / "record.json", VALID_RECORD)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(rules_yaml, encoding="utf-8")

    result = runner.invoke(
        app,
        ["evaluate", "--record", str(record_path), "--config", str(config_path)],
    )

    assert result.exit_code == 2, result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_cli_rejects_unparseable_as_of(tmp_path: Path, runner: CliRunner) -> None:
    record_path = write_json(tmp_path / "record.json", VALID_RECORD)

    result = runner.invoke(app, ["evaluate", "--record", str(record_path), "--as-of", "yesterday"])

    assert result.exit_code == 2, result.output
    assert isinstance(result.exception, SystemExit)
