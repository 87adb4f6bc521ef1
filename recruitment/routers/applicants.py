"""HR side of the application pipeline: review applicants and move them between statuses."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from recruitment.config import settings
from recruitment.core.pipeline import NOTIFY_STATUSES, can_transition, is_valid_status, transition_error
from recruitment.core.responses import ok
from recruitment.database import get_db
from recruitment.dependencies import get_current_hr
from recruitment.models.application import JobApplication
from recruitment.models.user import User
from recruitment.repos import application_repo
from recruitment.routers.applications import documents_payload
from recruitment.schemas.application import MassStatusUpdate, StatusUpdate
from recruitment.services.email_service import notify_many, notify_status_change

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/job-application/applicants", tags=["applicants"])


def _applicant_row(application: JobApplication) -> dict:
    applicant = application.applicant
    return {
        "id": application.id,
        "applicant_id": application.applicant_id,
        "first_name": applicant.first_name if applicant else None,
        "last_name": applicant.last_name if applicant else None,
        "name": applicant.full_name if applicant else None,
        "email": applicant.email if applicant else None,
        "applied_at": application.created_at.isoformat() if application.created_at else None,
        "status": application.status,
        "score": application.score,
        "documents": documents_payload(application),
    }


@router.get("")
def list_applicants(
    job_id: str | None = Query(None),
    job_id_camel: str | None = Query(None, alias="jobId"),
    status_filter: str | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
    _hr: User = Depends(get_current_hr),
):
    job_id = job_id or job_id_camel
    if not job_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Job ID is required")
    if status_filter and not is_valid_status(status_filter):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status filter")
    rows = application_repo.list_for_job(db, job_id, status=status_filter)
    return ok([_applicant_row(a) for a in rows])


@router.patch("")
def update_status(
    data: StatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    hr: User = Depends(get_current_hr),
):
    application = application_repo.get_active_by_id(db, data.application_id)
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")

    current = application.status
    if current == data.status:
        return ok(_applicant_row(application), "Status unchanged")
    if settings.enforce_status_transitions and not can_transition(current, data.status):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=transition_error(current, data.status))

    try:
        application = application_repo.set_status(db, application, data.status)
    except Exception as e:
        logger.exception("Status update failed for application=%s: %s", data.application_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update status") from e
    logger.info("Application %s moved %s -> %s by %s", application.id, current, data.status, hr.id)

    # Only after the commit; delivery problems never change this response.
    if data.status in NOTIFY_STATUSES and application.applicant:
        background_tasks.add_task(
            notify_status_change,
            application.applicant.email,
            application.job.title if application.job else "",
            application.applicant.full_name,
            data.status,
        )
    return ok(_applicant_row(application), "Application status updated successfully")


@router.patch("/mass-update")
def mass_update_status(
    data: MassStatusUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    hr: User = Depends(get_current_hr),
):
    if data.from_status == data.to_status:
        return ok({"updated": 0, "applications": []}, "Status unchanged")
    if settings.enforce_status_transitions and not can_transition(data.from_status, data.to_status):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=transition_error(data.from_status, data.to_status)
        )
    try:
        rows = application_repo.mass_update_status(db, data.job_id, data.from_status, data.to_status)
    except Exception as e:
        logger.exception("Mass update failed for job=%s: %s", data.job_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update applications") from e
    if not rows:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No matching applications found")
    logger.info("HR %s moved %d applications of job %s to %s", hr.id, len(rows), data.job_id, data.to_status)

    if data.to_status in NOTIFY_STATUSES:
        recipients = [
            {
                "to": a.applicant.email,
                "job_title": a.job.title if a.job else "",
                "applicant_name": a.applicant.full_name,
                "status": data.to_status,
            }
            for a in rows
            if a.applicant
        ]
        background_tasks.add_task(notify_many, recipients)

    return ok(
        {"updated": len(rows), "applications": [_applicant_row(a) for a in rows]},
        f"Updated {len(rows)} applications to {data.to_status}",
    )
