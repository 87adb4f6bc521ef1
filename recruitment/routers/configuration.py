import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from recruitment.core.responses import ok
from recruitment.database import get_db
from recruitment.dependencies import get_current_admin, get_current_user
from recruitment.models.user import User
from recruitment.repos.settings_repo import (
    NAMED_MODELS,
    empty_tables,
    list_active_named,
    list_experience_levels,
    seed_defaults,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("/all")
def all_reference_data(
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    """Active rows of every reference table, for job posting forms and filters."""
    data = {
        key: [{"id": r.id, "name": r.name} for r in list_active_named(db, model)]
        for key, model in NAMED_MODELS.items()
    }
    data["experience_levels"] = [
        {"id": r.id, "level_id": r.level_id, "label": r.label, "year_range": r.year_range}
        for r in list_experience_levels(db, active_only=True)
    ]
    return ok(data)


@router.get("/check")
def check_configuration(
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    missing = empty_tables(db)
    return ok({"is_valid": not missing, "empty_tables": missing})


@router.post("/seed")
def seed_configuration(
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    created = seed_defaults(db)
    logger.info("Reference defaults seeded by %s: %s", admin.email, created)
    return ok(created, "Default configuration seeded")
