"""Reference tables HR maintains from the settings screen."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from recruitment.core.responses import ok
from recruitment.database import get_db
from recruitment.dependencies import get_current_hr
from recruitment.models.reference import ExperienceLevel
from recruitment.models.user import User
from recruitment.repos.settings_repo import (
    NAMED_MODELS,
    create_or_reactivate_experience_level,
    create_or_reactivate_named,
    find_experience_level,
    find_named,
    format_name,
    list_experience_levels,
    list_named,
    rename_named,
    set_named_active,
    update_experience_level,
)
from recruitment.schemas.settings import (
    ExperienceLevelCreate,
    ExperienceLevelUpdate,
    NamedCreate,
    NamedUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/settings", tags=["settings"])

# (url segment, table key, display label)
NAMED_ROUTES = (
    ("departments", "departments", "Department"),
    ("employment", "employment_types", "Employment type"),
    ("education", "education_levels", "Education level"),
    ("skill", "skill_categories", "Skill category"),
)


def _named_row(row) -> dict:
    return {"id": row.id, "name": row.name, "is_active": row.is_active}


def _level_row(row: ExperienceLevel) -> dict:
    return {
        "id": row.id,
        "level_id": row.level_id,
        "label": row.label,
        "year_range": row.year_range,
        "is_active": row.is_active,
    }


def _register_named_routes(segment: str, key: str, label: str) -> None:
    model = NAMED_MODELS[key]

    def list_items(db: Session = Depends(get_db)):
        return ok([_named_row(r) for r in list_named(db, model)])

    def create_item(
        data: NamedCreate,
        db: Session = Depends(get_db),
        hr: User = Depends(get_current_hr),
    ):
        row, created, reactivated = create_or_reactivate_named(db, model, data.name)
        if not created and not reactivated:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{label} already exists")
        action = "reactivated" if reactivated else "added"
        logger.info("%s '%s' %s by %s", label, row.name, action, hr.id)
        return ok(_named_row(row), f'{label} "{row.name}" {action} successfully')

    def update_item(
        data: NamedUpdate,
        db: Session = Depends(get_db),
        hr: User = Depends(get_current_hr),
    ):
        if data.name is not None:
            formatted = format_name(data.name)
            if find_named(db, model, formatted, exclude_id=data.id):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"A {label.lower()} with this name already exists",
                )
            row = rename_named(db, model, data.id, formatted)
            if not row:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
            return ok(_named_row(row), f'{label} name updated to "{row.name}" successfully')

        row = set_named_active(db, model, data.id, data.is_active)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
        action = "activated" if row.is_active else "deactivated"
        logger.info("%s '%s' %s by %s", label, row.name, action, hr.id)
        return ok(_named_row(row), f'{label} "{row.name}" {action} successfully')

    router.add_api_route(f"/{segment}", list_items, methods=["GET"], name=f"list_{key}")
    router.add_api_route(f"/{segment}", create_item, methods=["POST"], name=f"create_{key}")
    router.add_api_route(f"/{segment}", update_item, methods=["PUT"], name=f"update_{key}")


for _segment, _key, _label in NAMED_ROUTES:
    _register_named_routes(_segment, _key, _label)


@router.get("/experience-levels")
def list_levels(db: Session = Depends(get_db)):
    return ok([_level_row(r) for r in list_experience_levels(db)])


@router.post("/experience-levels")
def create_level(
    data: ExperienceLevelCreate,
    db: Session = Depends(get_db),
    hr: User = Depends(get_current_hr),
):
    row, created, reactivated = create_or_reactivate_experience_level(db, data.level_id, data.label, data.year_range)
    if not created and not reactivated:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Experience level already exists")
    action = "reactivated" if reactivated else "added"
    logger.info("Experience level '%s' %s by %s", row.level_id, action, hr.id)
    return ok(_level_row(row), f'Experience level "{row.label}" {action} successfully')


@router.put("/experience-levels")
def update_level(
    data: ExperienceLevelUpdate,
    db: Session = Depends(get_db),
    _hr: User = Depends(get_current_hr),
):
    if data.level_id and find_experience_level(db, data.level_id, exclude_id=data.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An experience level with this ID already exists",
        )
    row = update_experience_level(
        db,
        data.id,
        level_id=data.level_id,
        label=data.label,
        year_range=data.year_range,
        is_active=data.is_active,
    )
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Experience level not found")
    return ok(_level_row(row), "Experience level updated successfully")
