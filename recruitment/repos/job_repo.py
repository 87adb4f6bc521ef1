import logging
from datetime import date

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from recruitment.core.security import generate_id
from recruitment.models.application import JobApplication
from recruitment.models.job import Job
from recruitment.models.reference import Department

logger = logging.getLogger(__name__)

JOB_FIELDS = (
    "title",
    "department_id",
    "employment_type_id",
    "education_level_id",
    "experience_level_id",
    "closing_date",
    "description",
    "responsibilities",
    "qualifications",
    "skills",
    "terms_and_conditions",
    "additional_information",
)


def _with_references(q):
    return q.options(
        joinedload(Job.department),
        joinedload(Job.employment_type),
        joinedload(Job.education_level),
        joinedload(Job.experience_level),
        joinedload(Job.poster),
    )


def _open_filter(today: date | None = None):
    return Job.closing_date >= (today or date.today())


def get_active_by_id(db: Session, job_id: str) -> Job | None:
    return _with_references(db.query(Job)).filter(Job.id == job_id, Job.is_active == True).first()


def list_open(db: Session, today: date | None = None) -> list[Job]:
    """Active jobs still accepting applications, newest first."""
    return (
        _with_references(db.query(Job))
        .filter(Job.is_active == True, _open_filter(today))
        .order_by(Job.created_at.desc())
        .all()
    )


def list_active(db: Session) -> list[Job]:
    """All active jobs including closed ones (HR dashboard)."""
    return _with_references(db.query(Job)).filter(Job.is_active == True).order_by(Job.created_at.desc()).all()


def search_open(
    db: Session,
    *,
    department_id: str | None = None,
    employment_type_id: str | None = None,
    search: str | None = None,
    limit: int = 10,
    offset: int = 0,
    today: date | None = None,
) -> tuple[list[Job], int]:
    """Filter open jobs by department, employment type and free text. Returns (items, total)."""
    q = (
        db.query(Job)
        .outerjoin(Department, Job.department_id == Department.id)
        .filter(Job.is_active == True, _open_filter(today))
    )
    if department_id:
        q = q.filter(Job.department_id == department_id)
    if employment_type_id:
        q = q.filter(Job.employment_type_id == employment_type_id)
    if search and search.strip():
        term = f"%{search.strip()}%"
        q = q.filter(
            or_(
                Job.title.ilike(term),
                Job.description.ilike(term),
                Department.name.ilike(term),
            )
        )
    total = q.count()
    items = _with_references(q).order_by(Job.created_at.desc()).offset(offset).limit(limit).all()
    return items, total


def get_counts(db: Session) -> dict[str, int]:
    total = db.query(func.count(Job.id)).scalar() or 0
    active = db.query(func.count(Job.id)).filter(Job.is_active == True).scalar() or 0
    return {"active_jobs": active, "inactive_jobs": total - active, "total_jobs": total}


def applicant_counts(db: Session, job_ids: list[str]) -> dict[str, int]:
    if not job_ids:
        return {}
    rows = (
        db.query(JobApplication.job_id, func.count(JobApplication.id))
        .filter(JobApplication.job_id.in_(job_ids), JobApplication.is_active == True)
        .group_by(JobApplication.job_id)
        .all()
    )
    return {job_id: count for job_id, count in rows}


def create(db: Session, data: dict, posted_by: str, location: str) -> Job:
    job = Job(
        id=generate_id(),
        posted_by=posted_by,
        location=location,
        is_active=True,
        **{field: data.get(field) for field in JOB_FIELDS},
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Job created: %s (%s)", job.title, job.id)
    return job


def update(db: Session, job_id: str, data: dict) -> Job | None:
    """Full-row update of an active job. Returns None when missing or soft-deleted."""
    job = db.query(Job).filter(Job.id == job_id, Job.is_active == True).first()
    if not job:
        return None
    for field in JOB_FIELDS:
        setattr(job, field, data.get(field))
    db.commit()
    db.refresh(job)
    return job


def soft_delete(db: Session, job_id: str) -> bool:
    job = db.query(Job).filter(Job.id == job_id, Job.is_active == True).first()
    if not job:
        return False
    job.is_active = False
    db.commit()
    logger.info("Job soft-deleted: %s", job_id)
    return True
