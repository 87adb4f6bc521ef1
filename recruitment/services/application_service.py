import logging
import random
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from recruitment.models.application import JobApplication
from recruitment.models.user import User
from recruitment.repos import application_repo, job_repo, profile_repo
from recruitment.services.file_storage import discard_upload, save_upload

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "You have already applied for this position"


class SubmissionError(Exception):
    def __init__(self, status_code: int, message: str, missing_fields: list[str] | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.missing_fields = missing_fields


def generate_score() -> float:
    """Placeholder ranking score in [50, 100]."""
    return round(random.uniform(50, 100), 2)


def submit_application(
    db: Session,
    user: User,
    job_id: str,
    resume: tuple[bytes, str | None],
    cover_letter: tuple[bytes, str | None],
    today: date | None = None,
) -> JobApplication:
    """
    Validate and store an application with its resume and cover letter.
    Raises SubmissionError for business-rule failures and UploadRejected for bad files.
    """
    job = job_repo.get_active_by_id(db, job_id)
    if not job:
        raise SubmissionError(404, "Job posting not found")
    if job.closing_date and job.closing_date < (today or date.today()):
        raise SubmissionError(400, "This job posting is closed")

    missing = profile_repo.missing_fields_for_application(db, user.id)
    if missing:
        raise SubmissionError(400, "Profile incomplete", missing_fields=missing)

    if application_repo.get_existing(db, job_id, user.id):
        raise SubmissionError(409, DUPLICATE_MESSAGE)

    subdir = f"applications/{user.id}"
    stored: list[str] = []
    try:
        resume_url, resume_name = save_upload(resume[0], resume[1], subdir, label="resume")
        stored.append(resume_url)
        cover_url, cover_name = save_upload(cover_letter[0], cover_letter[1], subdir, label="cover_letter")
        stored.append(cover_url)

        application = application_repo.add_application(db, job_id, user.id, generate_score())
        application_repo.add_document(db, application.id, "resume", resume_url, resume_name)
        application_repo.add_document(db, application.id, "cover_letter", cover_url, cover_name)
        db.commit()
        db.refresh(application)
    except IntegrityError as e:
        db.rollback()
        for url in stored:
            discard_upload(url)
        raise SubmissionError(409, DUPLICATE_MESSAGE) from e
    except Exception:
        db.rollback()
        for url in stored:
            discard_upload(url)
        raise

    logger.info("Application %s submitted by %s for job %s", application.id, user.id, job_id)
    return application
