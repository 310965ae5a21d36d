from __future__ import annotations

import pytest

from admitguard.schemas import PolicyConfig, PolicyEditor


def test_policy_defaults():
    policy = PolicyConfig()

    assert policy.min_age == 18
    assert policy.max_future_grad_years == 2
    assert policy.min_percentage == 60
    assert policy.min_cgpa == pytest.approx(6.0)
    assert policy.min_screening_score == 40
    assert policy.high_risk_threshold == 2


@pytest.mark.parametrize("raw", ["abc", "", None, "nan", float("inf")])
def test_non_numeric_policy_values_become_zero(raw):
    assert PolicyConfig(min_age=raw).min_age == 0


def test_numeric_strings_are_parsed():
    assert PolicyConfig(min_percentage="55.5").min_percentage == pytest.approx(55.5)


def test_staged_edits_do_not_touch_committed_policy():
    editor = PolicyEditor()

    pending = editor.stage("min_age", "21")

    assert pending.min_age == 21
    assert editor.committed.min_age == 18
    assert editor.is_dirty is True


def test_commit_copies_pending_to_committed():
    editor = PolicyEditor()
    editor.stage("high_risk_threshold", 4)
    editor.stage("min_cgpa", "7")

    committed = editor.commit()

    assert committed.high_risk_threshold == 4
    assert editor.committed.min_cgpa == 7
    assert editor.is_dirty is False


def test_cancel_discards_pending_edits():
    editor = PolicyEditor(PolicyConfig(min_screening_score=50))
    editor.stage("min_screening_score", 10)

    editor.cancel()

    assert editor.pending.min_screening_score == 50
    assert editor.committed.min_screening_score == 50
    assert editor.is_dirty is False


def test_stage_rejects_unknown_setting():
    with pytest.raises(KeyError):
        PolicyEditor().stage("max_age", 40)
