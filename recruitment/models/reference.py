"""Small lookup tables HR maintains from the settings screens."""

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func

from recruitment.database import Base


class _NamedReference:
    id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class Department(_NamedReference, Base):
    __tablename__ = "departments"


class EmploymentType(_NamedReference, Base):
    __tablename__ = "employment_types"


class EducationLevel(_NamedReference, Base):
    __tablename__ = "education_levels"


class SkillCategory(_NamedReference, Base):
    __tablename__ = "skill_categories"


class ExperienceLevel(Base):
    __tablename__ = "experience_levels"

    id = Column(String, primary_key=True, index=True)
    level_id = Column(String, unique=True, nullable=False)  # e.g. "entry", "mid"
    label = Column(String, nullable=False)
    year_range = Column(String, nullable=False)  # e.g. "0-2 years"
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
