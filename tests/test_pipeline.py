import pytest

from recruitment.core.pipeline import (
    STATUS_VALUES,
    ApplicationStatus,
    can_transition,
    is_valid_status,
    transition_error,
)


def test_status_values_cover_the_whole_pipeline():
    assert STATUS_VALUES == [
        "pending",
        "under_review",
        "shortlisted",
        "interview_scheduled",
        "rejected",
        "offered",
        "hired",
    ]
    assert ApplicationStatus("hired") is ApplicationStatus.HIRED


@pytest.mark.parametrize(
    "current,new",
    [
        ("pending", "under_review"),
        ("under_review", "shortlisted"),
        ("under_review", "rejected"),
        ("shortlisted", "interview_scheduled"),
        ("interview_scheduled", "offered"),
        ("offered", "hired"),
        ("interview_scheduled", "shortlisted"),
    ],
)
def test_forward_moves_are_allowed(current, new):
    assert can_transition(current, new) is True


@pytest.mark.parametrize(
    "current,new",
    [
        ("pending", "shortlisted"),
        ("pending", "hired"),
        ("rejected", "under_review"),
        ("hired", "offered"),
        ("shortlisted", "pending"),
    ],
)
def test_skips_and_reversals_are_refused(current, new):
    assert can_transition(current, new) is False


def test_is_valid_status():
    assert is_valid_status("offered") is True
    assert is_valid_status("archived") is False
    assert is_valid_status(None) is False


def test_transition_error_messages():
    assert transition_error("pending", "shortlisted") == "Application must be under review before it can be shortlisted"
    assert transition_error("hired", "offered") == "Cannot move application from hired to offered"
