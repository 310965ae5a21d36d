from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from admitguard.schemas import ApplicationRecord, InterviewStatus, Qualification, ScoreMode


def test_application_record_defaults():
    record = ApplicationRecord()

    assert record.full_name == ""
    assert record.dob is None
    assert record.qualification is None
    assert record.score_mode is ScoreMode.PERCENTAGE
    assert record.interview_status is None
    assert record.offer_letter_sent is False
    assert record.missing_required() == [
        "full_name",
        "email",
        "phone",
        "qualification",
        "aadhaar_number",
    ]


def test_application_record_accepts_form_payload():
    record = ApplicationRecord.model_validate(
        {
            "fullName": "Meera Nair",
            "email": "meera@example.com",
            "phone": "8123456789",
            "dob": "2001-09-30",
            "qualification": "M.Sc",
            "graduationYear": "2024",
            "score": "8.4",
            "scoreMode": "CGPA",
            "screeningScore": "",
            "interviewStatus": "Waitlisted",
            "aadhaarNumber": "123412341234",
            "offerLetterSent": True,
        }
    )

    assert record.full_name == "Meera Nair"
    assert record.dob == date(2001, 9, 30)
    assert record.qualification is Qualification.M_SC
    assert record.graduation_year == 2024
    assert record.score == pytest.approx(8.4)
    assert record.screening_score is None
    assert record.interview_status is InterviewStatus.WAITLISTED
    assert record.missing_required() == []


def test_application_record_rejects_unknown_qualification():
    with pytest.raises(ValidationError):
        ApplicationRecord(qualification="PhD")


def test_application_record_validates_assignment():
    record = ApplicationRecord()

    record.interview_status = "Cleared"
    record.score = ""

    assert record.interview_status is InterviewStatus.CLEARED
    assert record.score is None
    with pytest.raises(ValidationError):
        record.score_mode = "Grade"
