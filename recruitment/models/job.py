from sqlalchemy import Column, String, Text, Boolean, Date, DateTime, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from recruitment.database import Base

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests).
JSONList = JSON().with_variant(JSONB(), "postgresql")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    department_id = Column(String, ForeignKey("departments.id"), nullable=False)
    employment_type_id = Column(String, ForeignKey("employment_types.id"), nullable=False)
    education_level_id = Column(String, ForeignKey("education_levels.id"), nullable=False)
    experience_level_id = Column(String, ForeignKey("experience_levels.id"), nullable=False)
    location = Column(String)
    closing_date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False)
    responsibilities = Column(JSONList, nullable=False, default=list)
    qualifications = Column(JSONList, nullable=False, default=list)
    skills = Column(JSONList, nullable=False, default=list)
    terms_and_conditions = Column(Text, nullable=False)
    additional_information = Column(Text)
    posted_by = Column(String, ForeignKey("users.id", ondelete="SET NULL"))
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    department = relationship("Department")
    employment_type = relationship("EmploymentType")
    education_level = relationship("EducationLevel")
    experience_level = relationship("ExperienceLevel")
    poster = relationship("User")
    applications = relationship("JobApplication", back_populates="job")
