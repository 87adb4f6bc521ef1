import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from recruitment.core.responses import ok
from recruitment.database import get_db
from recruitment.dependencies import get_current_applicant
from recruitment.models.user import User
from recruitment.repos import profile_repo
from recruitment.schemas.profile import ProfileUpdate
from recruitment.services.file_storage import UploadRejected, discard_upload, save_upload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/applicant/profile", tags=["profile"])

DOCUMENT_TYPES = {
    "identification": ("national_id", "passport"),
    "education": ("transcript", "certificate"),
    "experience": ("reference_letter",),
    "certification": ("certificate",),
}


@router.get("")
def get_profile(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_applicant),
):
    profile = profile_repo.get_profile(db, user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return ok(profile)


@router.put("")
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_applicant),
):
    try:
        profile_repo.update_profile(db, user, data.model_dump(exclude_unset=True))
        return ok(profile_repo.get_profile(db, user.id), "Profile updated successfully")
    except Exception as e:
        logger.exception("Profile update failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update profile") from e


@router.post("/documents")
def upload_document(
    file: UploadFile = File(...),
    section: str = Form(...),
    document_type: str = Form(...),
    owner_id: str | None = Form(None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_applicant),
):
    section = section.strip().lower()
    document_type = document_type.strip().lower()
    if section not in DOCUMENT_TYPES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid document section")
    if document_type not in DOCUMENT_TYPES[section]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Document type for {section} must be one of: {', '.join(DOCUMENT_TYPES[section])}",
        )
    if section == "identification":
        owner_id = None
    elif not owner_id or not profile_repo.owner_exists(db, section, owner_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{section.title()} entry not found")

    try:
        url, file_name = save_upload(file.file.read(), file.filename, user.id)
    except UploadRejected as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    try:
        doc = profile_repo.replace_document(db, user.id, section, document_type, url, file_name, owner_id=owner_id)
    except Exception as e:
        discard_upload(url)
        logger.exception("Document save failed for user=%s section=%s: %s", user.id, section, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to upload document") from e
    logger.info("Document %s/%s uploaded for user %s", section, document_type, user.id)
    return ok({"file_url": doc.document_url, "file_name": doc.file_name, "id": doc.id}, "Document uploaded successfully")
