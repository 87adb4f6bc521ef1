"""Reference data (departments, employment types, ...) used by job postings."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from recruitment.core.security import generate_id
from recruitment.models.reference import (
    Department,
    EducationLevel,
    EmploymentType,
    ExperienceLevel,
    SkillCategory,
)

NAMED_MODELS = {
    "departments": Department,
    "employment_types": EmploymentType,
    "education_levels": EducationLevel,
    "skill_categories": SkillCategory,
}


def format_name(name: str) -> str:
    """Collapse whitespace and title-case each word: '  human   RESOURCES' -> 'Human Resources'."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split())


def list_named(db: Session, model) -> list:
    return db.query(model).order_by(model.is_active.desc(), model.name.asc()).all()


def list_active_named(db: Session, model) -> list:
    return db.query(model).filter(model.is_active == True).order_by(model.name.asc()).all()


def get_named_by_id(db: Session, model, item_id: str):
    return db.query(model).filter(model.id == item_id).first()


def find_named(db: Session, model, name: str, exclude_id: str | None = None):
    q = db.query(model).filter(func.lower(model.name) == name.lower())
    if exclude_id:
        q = q.filter(model.id != exclude_id)
    return q.first()


def create_or_reactivate_named(db: Session, model, name: str):
    """
    Insert a formatted name, or reactivate an inactive row with the same name.
    Returns (row, created, reactivated); (existing, False, False) when an active duplicate exists.
    """
    formatted = format_name(name)
    existing = find_named(db, model, formatted)
    if existing:
        if existing.is_active:
            return existing, False, False
        existing.is_active = True
        existing.name = formatted
        db.commit()
        db.refresh(existing)
        return existing, False, True
    row = model(id=generate_id(), name=formatted, is_active=True)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row, True, False


def rename_named(db: Session, model, item_id: str, name: str):
    row = get_named_by_id(db, model, item_id)
    if not row:
        return None
    row.name = format_name(name)
    db.commit()
    db.refresh(row)
    return row


def set_named_active(db: Session, model, item_id: str, is_active: bool):
    row = get_named_by_id(db, model, item_id)
    if not row:
        return None
    row.is_active = is_active
    db.commit()
    db.refresh(row)
    return row


# ---- Experience levels ----
def list_experience_levels(db: Session, active_only: bool = False) -> list[ExperienceLevel]:
    q = db.query(ExperienceLevel)
    if active_only:
        q = q.filter(ExperienceLevel.is_active == True)
    return q.order_by(ExperienceLevel.label.asc()).all()


def get_experience_level(db: Session, item_id: str) -> ExperienceLevel | None:
    return db.query(ExperienceLevel).filter(ExperienceLevel.id == item_id).first()


def find_experience_level(db: Session, level_id: str, exclude_id: str | None = None) -> ExperienceLevel | None:
    q = db.query(ExperienceLevel).filter(func.lower(ExperienceLevel.level_id) == level_id.lower())
    if exclude_id:
        q = q.filter(ExperienceLevel.id != exclude_id)
    return q.first()


def create_or_reactivate_experience_level(db: Session, level_id: str, label: str, year_range: str):
    """Same contract as create_or_reactivate_named, keyed by level_id."""
    existing = find_experience_level(db, level_id)
    if existing:
        if existing.is_active:
            return existing, False, False
        existing.is_active = True
        existing.label = label
        existing.year_range = year_range
        db.commit()
        db.refresh(existing)
        return existing, False, True
    row = ExperienceLevel(id=generate_id(), level_id=level_id, label=label, year_range=year_range, is_active=True)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row, True, False


def update_experience_level(
    db: Session,
    item_id: str,
    *,
    level_id: str | None = None,
    label: str | None = None,
    year_range: str | None = None,
    is_active: bool | None = None,
) -> ExperienceLevel | None:
    row = get_experience_level(db, item_id)
    if not row:
        return None
    if level_id:
        row.level_id = level_id
    if label:
        row.label = label
    if year_range:
        row.year_range = year_range
    if is_active is not None:
        row.is_active = is_active
    db.commit()
    db.refresh(row)
    return row


# ---- Configuration overview ----
CONFIG_TABLE_LABELS = {
    "departments": "Departments",
    "education_levels": "Education Levels",
    "employment_types": "Employment Types",
    "experience_levels": "Experience Levels",
    "skill_categories": "Skill Categories",
}


def count_active(db: Session) -> dict[str, int]:
    counts = {
        key: db.query(func.count(model.id)).filter(model.is_active == True).scalar() or 0
        for key, model in NAMED_MODELS.items()
    }
    counts["experience_levels"] = (
        db.query(func.count(ExperienceLevel.id)).filter(ExperienceLevel.is_active == True).scalar() or 0
    )
    return counts


def empty_tables(db: Session) -> list[str]:
    counts = count_active(db)
    return [label for key, label in CONFIG_TABLE_LABELS.items() if counts.get(key, 0) == 0]


DEFAULT_EMPLOYMENT_TYPES = ("Full Time", "Part Time", "Contract", "Internship")
DEFAULT_EDUCATION_LEVELS = ("Certificate", "Diploma", "Bachelor's Degree", "Master's Degree", "Doctorate")
DEFAULT_EXPERIENCE_LEVELS = (
    ("entry", "Entry Level", "0-2 years"),
    ("mid", "Mid Level", "3-5 years"),
    ("senior", "Senior Level", "6-10 years"),
    ("executive", "Executive", "10+ years"),
)


def seed_defaults(db: Session) -> dict[str, int]:
    """
    Seed employment types, education levels and experience levels when their tables are empty.
    Departments and skill categories are institution-specific and never seeded.
    Returns number created per table.
    """
    created = {"employment_types": 0, "education_levels": 0, "experience_levels": 0}
    if not db.query(EmploymentType).first():
        for name in DEFAULT_EMPLOYMENT_TYPES:
            db.add(EmploymentType(id=generate_id(), name=name, is_active=True))
            created["employment_types"] += 1
    if not db.query(EducationLevel).first():
        for name in DEFAULT_EDUCATION_LEVELS:
            db.add(EducationLevel(id=generate_id(), name=name, is_active=True))
            created["education_levels"] += 1
    if not db.query(ExperienceLevel).first():
        for level_id, label, year_range in DEFAULT_EXPERIENCE_LEVELS:
            db.add(ExperienceLevel(id=generate_id(), level_id=level_id, label=label, year_range=year_range, is_active=True))
            created["experience_levels"] += 1
    db.commit()
    return created
