import logging

from fastapi import APIRouter, Depends, HTTPException, status

from recruitment.dependencies import get_current_hr
from recruitment.models.user import User
from recruitment.schemas.notification import MassStatusEmail, StatusEmail
from recruitment.services.email_service import send_application_status_email, send_mass_status_emails

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.post("/email")
def send_status_email(data: StatusEmail, _hr: User = Depends(get_current_hr)):
    try:
        message_id = send_application_status_email(data.to, data.job_title, data.applicant_name, data.status)
    except Exception as e:
        logger.exception("Status email to %s failed: %s", data.to, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to send email") from e
    return {"success": True, "data": {"message_id": message_id}, "message": "Email sent successfully"}


@router.post("/email/mass")
def send_mass_email(data: MassStatusEmail, _hr: User = Depends(get_current_hr)):
    result = send_mass_status_emails([r.model_dump() for r in data.recipients])
    return {
        "success": result["failed"] == 0,
        "data": result,
        "message": f"Successfully sent {result['sent']} emails, {result['failed']} failed",
    }
