import logging

from sqlalchemy.orm import Session, joinedload, selectinload

from recruitment.core.security import generate_id
from recruitment.models.application import ApplicationDocument, JobApplication

logger = logging.getLogger(__name__)


def get_existing(db: Session, job_id: str, applicant_id: str) -> JobApplication | None:
    return (
        db.query(JobApplication)
        .filter(JobApplication.job_id == job_id, JobApplication.applicant_id == applicant_id)
        .first()
    )


def add_application(db: Session, job_id: str, applicant_id: str, score: float) -> JobApplication:
    """Stage a pending application in the current transaction; caller commits."""
    application = JobApplication(
        id=generate_id(),
        job_id=job_id,
        applicant_id=applicant_id,
        status="pending",
        score=score,
        is_active=True,
    )
    db.add(application)
    db.flush()
    return application


def add_document(db: Session, application_id: str, document_type: str, url: str, file_name: str) -> ApplicationDocument:
    doc = ApplicationDocument(
        id=generate_id(),
        application_id=application_id,
        document_type=document_type,
        document_url=url,
        file_name=file_name,
    )
    db.add(doc)
    return doc


def list_for_applicant(db: Session, applicant_id: str) -> list[JobApplication]:
    return (
        db.query(JobApplication)
        .options(selectinload(JobApplication.documents), joinedload(JobApplication.job))
        .filter(JobApplication.applicant_id == applicant_id, JobApplication.is_active == True)
        .order_by(JobApplication.created_at.desc())
        .all()
    )


def withdraw(db: Session, application_id: str, applicant_id: str) -> bool:
    """Hard-delete an applicant's own application and its documents."""
    application = (
        db.query(JobApplication)
        .filter(JobApplication.id == application_id, JobApplication.applicant_id == applicant_id)
        .first()
    )
    if not application:
        return False
    try:
        for doc in list(application.documents):
            db.delete(doc)
        db.delete(application)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return True


def list_for_job(db: Session, job_id: str, status: str | None = None) -> list[JobApplication]:
    q = (
        db.query(JobApplication)
        .options(selectinload(JobApplication.documents), joinedload(JobApplication.applicant))
        .filter(JobApplication.job_id == job_id, JobApplication.is_active == True)
    )
    if status:
        q = q.filter(JobApplication.status == status)
    return q.order_by(JobApplication.created_at.desc()).all()


def get_active_by_id(db: Session, application_id: str) -> JobApplication | None:
    return (
        db.query(JobApplication)
        .options(joinedload(JobApplication.applicant), joinedload(JobApplication.job))
        .filter(JobApplication.id == application_id, JobApplication.is_active == True)
        .first()
    )


def set_status(db: Session, application: JobApplication, status: str) -> JobApplication:
    application.status = status
    db.commit()
    db.refresh(application)
    return application


def mass_update_status(db: Session, job_id: str, from_status: str, to_status: str) -> list[JobApplication]:
    """Move every active application of a job from one status to another. Returns the moved rows."""
    rows = (
        db.query(JobApplication)
        .options(joinedload(JobApplication.applicant), joinedload(JobApplication.job))
        .filter(
            JobApplication.job_id == job_id,
            JobApplication.status == from_status,
            JobApplication.is_active == True,
        )
        .all()
    )
    if not rows:
        return []
    try:
        for application in rows:
            application.status = to_status
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Mass status update job=%s %s -> %s: %d applications", job_id, from_status, to_status, len(rows))
    return rows

