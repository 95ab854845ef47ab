"""
Activity review state machine.

pending --approve--> approved
pending --reject---> rejected

approved and rejected are terminal. Every status change goes through
``review_changes`` so the transition rules live in one place.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from student_hub.enums.app_enum import ActivityStatusEnum
from student_hub.models.activity import MAX_CREDITS

DEFAULT_REJECTION_REMARKS = "Activity rejected by faculty"

ALLOWED_TRANSITIONS = {
    ActivityStatusEnum.pending: {ActivityStatusEnum.approved, ActivityStatusEnum.rejected},
    ActivityStatusEnum.approved: set(),
    ActivityStatusEnum.rejected: set(),
}


class InvalidTransition(ValueError):
    pass


@dataclass(frozen=True)
class ReviewDecision:
    status: ActivityStatusEnum
    credits: Optional[float] = None
    remarks: Optional[str] = None


def clamp_credits(value) -> float:
    value = float(value or 0)
    return max(0.0, min(value, float(MAX_CREDITS)))


def can_transition(current: ActivityStatusEnum, target: ActivityStatusEnum) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


def review_changes(activity, decision: ReviewDecision, reviewer_id: int, now: datetime = None) -> dict:
    """
    Build the column changes for reviewing ``activity``.

    Raises InvalidTransition when the activity is no longer pending or the
    target status is not reachable.
    """
    current = ActivityStatusEnum(activity.status)
    if current != ActivityStatusEnum.pending:
        raise InvalidTransition("Activity has already been reviewed")
    if not can_transition(current, decision.status):
        raise InvalidTransition(f"Cannot move activity from {current.value} to {decision.status.value}")

    changes = {
        "status": decision.status,
        "approved_by": reviewer_id,
        "reviewed_at": now or datetime.utcnow(),
    }

    if decision.status == ActivityStatusEnum.approved:
        credits = decision.credits if decision.credits is not None else activity.credits
        changes["credits"] = clamp_credits(credits)
        changes["remarks"] = decision.remarks
    else:
        changes["remarks"] = decision.remarks or DEFAULT_REJECTION_REMARKS

    return changes
