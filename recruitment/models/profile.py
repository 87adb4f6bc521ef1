from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Table, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from recruitment.database import Base

user_skills = Table(
    "user_skills",
    Base.metadata,
    Column("user_id", String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("skill_id", String, ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True),
)


class ApplicantProfile(Base):
    __tablename__ = "applicant_profiles"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    middle_name = Column(String)
    phone = Column(String)
    date_of_birth = Column(Date)
    gender = Column(String)  # male | female | other
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="profile")


class Education(Base):
    __tablename__ = "education"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    degree = Column(String)
    school = Column(String)
    location = Column(String)
    graduation_year = Column(String)
    grade = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="education")


class Experience(Base):
    __tablename__ = "experience"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String)
    company = Column(String)
    location = Column(String)
    start_date = Column(Date)
    end_date = Column(Date)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="experience")


class Certification(Base):
    __tablename__ = "certifications"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String)
    issuer = Column(String)
    issue_date = Column(Date)
    expiry_date = Column(Date)
    credential_url = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="certifications")


class ProfileDocument(Base):
    """
    File attached to a profile section. owner_id points at the education,
    experience or certification row; identification documents have no owner.
    """

    __tablename__ = "profile_documents"
    __table_args__ = (
        UniqueConstraint("user_id", "section", "owner_id", "document_type", name="uq_profile_document_slot"),
    )

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    section = Column(String, nullable=False)  # identification | education | experience | certification
    owner_id = Column(String)
    document_type = Column(String, nullable=False)
    document_url = Column(String, nullable=False)
    file_name = Column(String, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="documents")


class Skill(Base):
    __tablename__ = "skills"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    users = relationship("User", secondary=user_skills, back_populates="skills")
