"""Hard rules on qualification and interview outcome."""

from __future__ import annotations

from ...schemas import ApplicationRecord, InterviewStatus
from .base import RuleContext

OFFER_ELIGIBLE_STATUSES = frozenset({InterviewStatus.CLEARED, InterviewStatus.WAITLISTED})


class QualificationRule:
    field = "qualification"
    kind = "hard"

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if record.qualification is None:
            return "Please select a qualification"
        return None


class OfferLetterRule:
    """An offer letter may only go to Cleared or Waitlisted candidates."""

    field = "offer_letter_sent"
    kind = "hard"

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if record.offer_letter_sent and record.interview_status not in OFFER_ELIGIBLE_STATUSES:
            return "Offer letter can only be sent to Cleared or Waitlisted candidates"
        return None


class InterviewStatusRule:
    """Rejected candidates are blocked regardless of any other field."""

    field = "interview_status"
    kind = "hard"

    def evaluate(self, record: ApplicationRecord, context: RuleContext) -> str | None:
        if record.interview_status is InterviewStatus.REJECTED:
            return "Rejected candidates cannot be enrolled"
        return None
