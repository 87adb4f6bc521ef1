"""Applicant status pipeline shared by the HR endpoints and the notifier."""

from enum import Enum


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    SHORTLISTED = "shortlisted"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    REJECTED = "rejected"
    OFFERED = "offered"
    HIRED = "hired"


STATUS_VALUES = [s.value for s in ApplicationStatus]

# Moves offered by the HR dashboard, checked only when enforcement is switched on.
# Rejected and hired are terminal.
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    ApplicationStatus.PENDING.value: frozenset({ApplicationStatus.UNDER_REVIEW.value}),
    ApplicationStatus.UNDER_REVIEW.value: frozenset(
        {ApplicationStatus.SHORTLISTED.value, ApplicationStatus.REJECTED.value}
    ),
    ApplicationStatus.SHORTLISTED.value: frozenset({ApplicationStatus.INTERVIEW_SCHEDULED.value}),
    ApplicationStatus.INTERVIEW_SCHEDULED.value: frozenset(
        {ApplicationStatus.OFFERED.value, ApplicationStatus.SHORTLISTED.value}
    ),
    ApplicationStatus.OFFERED.value: frozenset({ApplicationStatus.HIRED.value}),
    ApplicationStatus.REJECTED.value: frozenset(),
    ApplicationStatus.HIRED.value: frozenset(),
}

# Statuses that trigger an applicant email.
NOTIFY_STATUSES = frozenset({ApplicationStatus.SHORTLISTED.value, ApplicationStatus.REJECTED.value})


def is_valid_status(value: str | None) -> bool:
    return value in STATUS_VALUES


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get((current or "").lower(), frozenset())


def transition_error(current: str, new: str) -> str:
    if current == ApplicationStatus.PENDING.value and new in NOTIFY_STATUSES:
        return f"Application must be under review before it can be {new}"
    return f"Cannot move application from {current} to {new}"
