import logging
from datetime import date

from sqlalchemy.orm import Session

from recruitment.core.security import generate_id
from recruitment.models.profile import (
    ApplicantProfile,
    Certification,
    Education,
    Experience,
    ProfileDocument,
    Skill,
)
from recruitment.models.user import User

logger = logging.getLogger(__name__)

EDUCATION_FIELDS = ("degree", "school", "location", "graduation_year", "grade")
EXPERIENCE_FIELDS = ("title", "company", "location", "start_date", "end_date", "description")
CERTIFICATION_FIELDS = ("name", "issuer", "issue_date", "expiry_date", "credential_url")
PROFILE_FIELDS = ("middle_name", "phone", "date_of_birth", "gender")

SECTION_MODELS = {
    "education": Education,
    "experience": Experience,
    "certification": Certification,
}


def _iso(value):
    return value.isoformat() if value is not None else None


def _document_to_dict(doc: ProfileDocument) -> dict:
    return {
        "id": doc.id,
        "document_type": doc.document_type,
        "document_url": doc.document_url,
        "file_name": doc.file_name,
        "uploaded_at": _iso(doc.uploaded_at),
    }


def _documents_by_owner(docs: list[ProfileDocument], section: str) -> dict[str, dict]:
    grouped: dict[str, dict] = {}
    for doc in docs:
        if doc.section == section and doc.owner_id:
            grouped.setdefault(doc.owner_id, {})[doc.document_type] = _document_to_dict(doc)
    return grouped


def get_profile(db: Session, user_id: str) -> dict | None:
    """Assemble the full applicant profile. Returns None when the user does not exist."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return None
    profile = db.query(ApplicantProfile).filter(ApplicantProfile.user_id == user_id).first()
    docs = db.query(ProfileDocument).filter(ProfileDocument.user_id == user_id).all()
    education = db.query(Education).filter(Education.user_id == user_id).all()
    experience = db.query(Experience).filter(Experience.user_id == user_id).all()
    certifications = db.query(Certification).filter(Certification.user_id == user_id).all()

    education_docs = _documents_by_owner(docs, "education")
    experience_docs = _documents_by_owner(docs, "experience")
    certification_docs = _documents_by_owner(docs, "certification")

    # Most recent first; open-ended entries (no end/expiry) count as current.
    education.sort(key=lambda e: e.graduation_year or "", reverse=True)
    experience.sort(
        key=lambda e: (e.end_date is None, e.end_date or e.start_date or date.min, e.start_date or date.min),
        reverse=True,
    )
    certifications.sort(
        key=lambda c: (c.expiry_date is None, c.expiry_date or c.issue_date or date.min, c.issue_date or date.min),
        reverse=True,
    )

    return {
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "middle_name": profile.middle_name if profile else None,
        "phone": profile.phone if profile else None,
        "date_of_birth": _iso(profile.date_of_birth) if profile else None,
        "gender": profile.gender if profile else None,
        "education": [
            {"id": e.id, **{f: getattr(e, f) for f in EDUCATION_FIELDS}, "documents": education_docs.get(e.id, {})}
            for e in education
        ],
        "experience": [
            {
                "id": e.id,
                "title": e.title,
                "company": e.company,
                "location": e.location,
                "start_date": _iso(e.start_date),
                "end_date": _iso(e.end_date),
                "description": e.description,
                "documents": experience_docs.get(e.id, {}),
            }
            for e in experience
        ],
        "certifications": [
            {
                "id": c.id,
                "name": c.name,
                "issuer": c.issuer,
                "issue_date": _iso(c.issue_date),
                "expiry_date": _iso(c.expiry_date),
                "credential_url": c.credential_url,
                "documents": certification_docs.get(c.id, {}),
            }
            for c in certifications
        ],
        "identification_documents": {
            d.document_type: _document_to_dict(d) for d in docs if d.section == "identification"
        },
        "skills": sorted(s.name for s in user.skills),
    }


def _upsert_profile_fields(db: Session, user_id: str, fields: dict) -> None:
    profile = db.query(ApplicantProfile).filter(ApplicantProfile.user_id == user_id).first()
    if not profile:
        profile = ApplicantProfile(id=generate_id(), user_id=user_id)
        db.add(profile)
    for key, value in fields.items():
        setattr(profile, key, value)


def _sync_rows(db: Session, model, user_id: str, items: list[dict], fields: tuple[str, ...]) -> None:
    """
    Make the stored rows match the submitted list: rows whose id is absent are deleted,
    rows with an id are updated in place, items without an id are inserted.
    Items with no values at all are ignored.
    """
    keep_ids = {item["id"] for item in items if item.get("id")}
    q = db.query(model).filter(model.user_id == user_id)
    if keep_ids:
        q = q.filter(~model.id.in_(keep_ids))
    stale_ids = [row.id for row in q.all()]
    if stale_ids:
        db.query(ProfileDocument).filter(ProfileDocument.owner_id.in_(stale_ids)).delete(synchronize_session=False)
        db.query(model).filter(model.id.in_(stale_ids)).delete(synchronize_session=False)

    for item in items:
        values = {f: item.get(f) for f in fields}
        if item.get("id"):
            row = db.query(model).filter(model.id == item["id"], model.user_id == user_id).first()
            if row is None:
                continue
            for key, value in values.items():
                setattr(row, key, value)
        elif any(v is not None for v in values.values()):
            db.add(model(id=generate_id(), user_id=user_id, **values))


def get_or_create_skill(db: Session, name: str) -> Skill:
    skill = db.query(Skill).filter(Skill.name == name).first()
    if skill:
        return skill
    skill = Skill(id=generate_id(), name=name)
    db.add(skill)
    db.flush()
    return skill


def _replace_skills(db: Session, user: User, names: list[str]) -> None:
    seen = []
    for raw in names:
        name = raw.strip()
        if name and name not in seen:
            seen.append(name)
    user.skills = [get_or_create_skill(db, name) for name in seen]


def update_profile(db: Session, user: User, data: dict) -> None:
    """
    Apply a partial profile update in one transaction.
    `data` holds only the keys the client sent (already validated).
    """
    try:
        if "first_name" in data and data["first_name"] is not None:
            user.first_name = data["first_name"]
        if "last_name" in data and data["last_name"] is not None:
            user.last_name = data["last_name"]

        profile_fields = {k: data[k] for k in PROFILE_FIELDS if k in data}
        if profile_fields:
            _upsert_profile_fields(db, user.id, profile_fields)

        if data.get("education") is not None:
            _sync_rows(db, Education, user.id, data["education"], EDUCATION_FIELDS)
        if data.get("experience") is not None:
            _sync_rows(db, Experience, user.id, data["experience"], EXPERIENCE_FIELDS)
        if data.get("certifications") is not None:
            _sync_rows(db, Certification, user.id, data["certifications"], CERTIFICATION_FIELDS)
        if "skills" in data:
            _replace_skills(db, user, data["skills"] or [])

        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Profile updated for user %s: %s", user.id, ", ".join(sorted(data.keys())))


def owner_exists(db: Session, section: str, owner_id: str, user_id: str) -> bool:
    model = SECTION_MODELS.get(section)
    if model is None:
        return False
    return db.query(model).filter(model.id == owner_id, model.user_id == user_id).first() is not None


def replace_document(
    db: Session,
    user_id: str,
    section: str,
    document_type: str,
    url: str,
    file_name: str,
    owner_id: str | None = None,
) -> ProfileDocument:
    """Store a document in its slot, dropping whatever was uploaded there before."""
    try:
        q = db.query(ProfileDocument).filter(
            ProfileDocument.user_id == user_id,
            ProfileDocument.section == section,
            ProfileDocument.document_type == document_type,
        )
        q = q.filter(ProfileDocument.owner_id == owner_id) if owner_id else q.filter(ProfileDocument.owner_id.is_(None))
        q.delete(synchronize_session=False)
        doc = ProfileDocument(
            id=generate_id(),
            user_id=user_id,
            section=section,
            owner_id=owner_id,
            document_type=document_type,
            document_url=url,
            file_name=file_name,
        )
        db.add(doc)
        db.commit()
        db.refresh(doc)
        return doc
    except Exception:
        db.rollback()
        raise


def missing_fields_for_application(db: Session, user_id: str) -> list[str]:
    """Labels of the profile parts that must be filled in before applying for a job."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        return ["Profile"]
    profile = db.query(ApplicantProfile).filter(ApplicantProfile.user_id == user_id).first()
    missing = []
    if not user.first_name:
        missing.append("First Name")
    if not user.last_name:
        missing.append("Last Name")
    if not user.email:
        missing.append("Email")
    if not profile or not profile.phone:
        missing.append("Phone Number")
    if not profile or not profile.date_of_birth:
        missing.append("Date of Birth")
    if not profile or not profile.gender:
        missing.append("Gender")

    education = db.query(Education).filter(Education.user_id == user_id).all()
    if not any(e.degree and e.school and e.location and e.graduation_year for e in education):
        missing.append("Education Details")

    experience = db.query(Experience).filter(Experience.user_id == user_id).all()
    if not any(e.title and e.company and e.location and e.start_date for e in experience):
        missing.append("Work Experience")

    if not user.skills:
        missing.append("Skills")
    return missing
