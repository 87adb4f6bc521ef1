"""Counts for the HR dashboard."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from recruitment.core.pipeline import STATUS_VALUES
from recruitment.models.application import JobApplication
from recruitment.models.job import Job
from recruitment.models.user import ROLES, User


def get_stats(db: Session) -> dict:
    users_by_role = dict(db.query(User.role, func.count(User.id)).group_by(User.role).all())
    active_jobs = db.query(func.count(Job.id)).filter(Job.is_active == True).scalar() or 0
    by_status = dict(
        db.query(JobApplication.status, func.count(JobApplication.id))
        .filter(JobApplication.is_active == True)
        .group_by(JobApplication.status)
        .all()
    )
    return {
        "users": {role: users_by_role.get(role, 0) for role in ROLES},
        "users_total": sum(users_by_role.values()),
        "active_jobs": active_jobs,
        "applications": {status: by_status.get(status, 0) for status in STATUS_VALUES},
        "applications_total": sum(by_status.values()),
    }
