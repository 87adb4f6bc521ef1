from recruitment.models.user import User
from recruitment.models.profile import (
    ApplicantProfile,
    Certification,
    Education,
    Experience,
    ProfileDocument,
    Skill,
    user_skills,
)
from recruitment.models.reference import (
    Department,
    EducationLevel,
    EmploymentType,
    ExperienceLevel,
    SkillCategory,
)
from recruitment.models.job import Job
from recruitment.models.application import ApplicationDocument, JobApplication

__all__ = [
    "User",
    "ApplicantProfile",
    "Education",
    "Experience",
    "Certification",
    "ProfileDocument",
    "Skill",
    "user_skills",
    "Department",
    "EmploymentType",
    "EducationLevel",
    "ExperienceLevel",
    "SkillCategory",
    "Job",
    "JobApplication",
    "ApplicationDocument",
]
