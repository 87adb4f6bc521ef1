from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from recruitment.database import Base

ROLE_APPLICANT = "APPLICANT"
ROLE_HR = "HR"
ROLE_ADMIN = "ADMIN"
ROLES = (ROLE_APPLICANT, ROLE_HR, ROLE_ADMIN)


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    role = Column(String, nullable=False, default=ROLE_APPLICANT)  # APPLICANT | HR | ADMIN
    position = Column(String)  # HR staff title
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    profile = relationship(
        "ApplicantProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    education = relationship("Education", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    experience = relationship("Experience", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    certifications = relationship(
        "Certification", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    documents = relationship(
        "ProfileDocument", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    skills = relationship("Skill", secondary="user_skills", back_populates="users")
    applications = relationship("JobApplication", back_populates="applicant", passive_deletes=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
