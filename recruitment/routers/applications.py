import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from recruitment.core.responses import ok
from recruitment.database import get_db
from recruitment.dependencies import get_current_applicant
from recruitment.models.application import JobApplication
from recruitment.models.user import User
from recruitment.repos.application_repo import list_for_applicant, withdraw
from recruitment.schemas.application import WithdrawRequest
from recruitment.services.application_service import SubmissionError, submit_application
from recruitment.services.file_storage import UploadRejected

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/job-application", tags=["applications"])


def documents_payload(application: JobApplication) -> list[dict]:
    return [
        {
            "document_type": d.document_type,
            "document_url": d.document_url,
            "file_name": d.file_name,
        }
        for d in application.documents
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
def apply_for_job(
    job_id: str = Form(...),
    resume: UploadFile = File(...),
    cover_letter: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_applicant),
):
    try:
        application = submit_application(
            db,
            user,
            job_id,
            (resume.file.read(), resume.filename),
            (cover_letter.file.read(), cover_letter.filename),
        )
    except SubmissionError as e:
        detail = {"message": e.message, "missing_fields": e.missing_fields} if e.missing_fields else e.message
        raise HTTPException(status_code=e.status_code, detail=detail) from e
    except UploadRejected as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.exception("Application submit failed for user=%s job=%s: %s", user.id, job_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to submit application"
        ) from e
    return ok(
        {"id": application.id, "status": application.status, "score": application.score},
        "Application submitted successfully",
    )


@router.get("")
def my_applications(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_applicant),
):
    rows = list_for_applicant(db, user.id)
    return ok(
        [
            {
                "id": a.id,
                "job_id": a.job_id,
                "job_title": a.job.title if a.job else None,
                "closing_date": a.job.closing_date.isoformat() if a.job and a.job.closing_date else None,
                "status": a.status,
                "score": a.score,
                "applied_at": a.created_at.isoformat() if a.created_at else None,
                "documents": documents_payload(a),
            }
            for a in rows
        ]
    )


def _withdraw(db: Session, application_id: str, user: User) -> dict:
    try:
        removed = withdraw(db, application_id, user.id)
    except Exception as e:
        logger.exception("Withdraw failed for application=%s: %s", application_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to withdraw application"
        ) from e
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found or unauthorized")
    logger.info("Application %s withdrawn by %s", application_id, user.id)
    return ok(message="Application withdrawn successfully")


@router.delete("/{application_id}")
def withdraw_application(
    application_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_applicant),
):
    return _withdraw(db, application_id, user)


@router.patch("")
def withdraw_application_by_body(
    data: WithdrawRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_applicant),
):
    """Same as DELETE /{id}, for clients that send {"applicationId": ...}."""
    return _withdraw(db, data.application_id, user)
