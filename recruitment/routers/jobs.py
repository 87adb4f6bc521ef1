import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from recruitment.config import settings
from recruitment.core.responses import ok
from recruitment.database import get_db
from recruitment.dependencies import get_current_hr
from recruitment.models.job import Job
from recruitment.models.reference import Department, EducationLevel, EmploymentType
from recruitment.models.user import User
from recruitment.repos import job_repo
from recruitment.repos.settings_repo import get_experience_level, get_named_by_id
from recruitment.schemas.job import JobPayload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/jobs", tags=["jobs"])

NOT_FOUND = "Job posting not found"


def _iso(value):
    return value.isoformat() if value is not None else None


def _job_summary(job: Job) -> dict:
    return {
        "id": job.id,
        "title": job.title,
        "department_id": job.department_id,
        "department_name": job.department.name if job.department else None,
        "employment_type_id": job.employment_type_id,
        "employment_type_name": job.employment_type.name if job.employment_type else None,
        "location": job.location,
        "closing_date": _iso(job.closing_date),
        "description": job.description,
        "is_active": job.is_active,
        "created_at": _iso(job.created_at),
    }


def _job_detail(job: Job) -> dict:
    data = _job_summary(job)
    data.update(
        {
            "education_level_id": job.education_level_id,
            "education_level_name": job.education_level.name if job.education_level else None,
            "experience_level_id": job.experience_level_id,
            "experience_level_label": job.experience_level.label if job.experience_level else None,
            "experience_year_range": job.experience_level.year_range if job.experience_level else None,
            "responsibilities": job.responsibilities or [],
            "qualifications": job.qualifications or [],
            "skills": job.skills or [],
            "terms_and_conditions": job.terms_and_conditions,
            "additional_information": job.additional_information,
            "posted_by": job.posted_by,
            "posted_by_name": job.poster.full_name if job.poster else None,
            "updated_at": _iso(job.updated_at),
        }
    )
    return data


def _check_references(db: Session, data: JobPayload) -> None:
    checks = (
        (Department, data.department_id, "Selected department does not exist"),
        (EmploymentType, data.employment_type_id, "Selected employment type does not exist"),
        (EducationLevel, data.education_level_id, "Selected education level does not exist"),
    )
    for model, item_id, message in checks:
        if not get_named_by_id(db, model, item_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    if not get_experience_level(db, data.experience_level_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Selected experience level does not exist")


@router.get("")
def list_jobs(db: Session = Depends(get_db)):
    """Public board: active postings that are still open."""
    return ok([_job_summary(j) for j in job_repo.list_open(db)])


@router.get("/counts")
def job_counts(db: Session = Depends(get_db)):
    return ok(job_repo.get_counts(db))


@router.get("/search")
def search_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    department_id: str | None = None,
    employment_type_id: str | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
):
    items, total = job_repo.search_open(
        db,
        department_id=department_id or None,
        employment_type_id=employment_type_id or None,
        search=search,
        limit=limit,
        offset=(page - 1) * limit,
    )
    return {
        "success": True,
        "data": [_job_summary(j) for j in items],
        "total": total,
        "page": page,
        "limit": limit,
    }


@router.get("/manage")
def manage_jobs(db: Session = Depends(get_db), _hr: User = Depends(get_current_hr)):
    """HR view: every active posting, closed ones included, with applicant counts."""
    jobs = job_repo.list_active(db)
    counts = job_repo.applicant_counts(db, [j.id for j in jobs])
    return ok([{**_job_summary(j), "applicant_count": counts.get(j.id, 0)} for j in jobs])


@router.get("/{job_id}")
def get_job(job_id: str, db: Session = Depends(get_db)):
    job = job_repo.get_active_by_id(db, job_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return ok(_job_detail(job))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_job(
    data: JobPayload,
    db: Session = Depends(get_db),
    hr: User = Depends(get_current_hr),
):
    _check_references(db, data)
    try:
        job = job_repo.create(db, data.model_dump(), posted_by=hr.id, location=settings.default_job_location)
        return ok({"id": job.id}, "Job posting created successfully")
    except Exception as e:
        logger.exception("Create job failed for user=%s: %s", hr.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create job posting") from e


@router.put("/{job_id}")
def update_job(
    job_id: str,
    data: JobPayload,
    db: Session = Depends(get_db),
    hr: User = Depends(get_current_hr),
):
    _check_references(db, data)
    try:
        job = job_repo.update(db, job_id, data.model_dump())
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        logger.info("Job %s updated by %s", job_id, hr.id)
        return ok({"id": job.id}, "Job posting updated successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Update job failed for job=%s: %s", job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update job posting") from e


@router.delete("/{job_id}")
def delete_job(
    job_id: str,
    db: Session = Depends(get_db),
    hr: User = Depends(get_current_hr),
):
    if not job_repo.soft_delete(db, job_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    logger.info("Job %s deactivated by %s", job_id, hr.id)
    return ok(message="Job posting deleted successfully")
