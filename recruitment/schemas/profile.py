import re
from datetime import date, datetime

from pydantic import BaseModel, field_validator, model_validator

PHONE_RE = re.compile(r"^\+?[\d\s-]{8,}$")
MONTH_RE = re.compile(r"^\d{4}-\d{2}$")
GENDERS = ("male", "female", "other")
MAX_AGE_YEARS = 120


def parse_month_or_date(v):
    """Accept YYYY-MM (stored as the first of the month) or a full ISO date."""
    if v is None or isinstance(v, date):
        return v
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return None
        if MONTH_RE.match(v):
            return datetime.strptime(v + "-01", "%Y-%m-%d").date()
        return date.fromisoformat(v[:10])
    return v


class EducationEntry(BaseModel):
    id: str | None = None
    degree: str | None = None
    school: str | None = None
    location: str | None = None
    graduation_year: str | None = None
    grade: str | None = None

    @field_validator("graduation_year", mode="before")
    @classmethod
    def year_as_text(cls, v):
        return str(v) if isinstance(v, int) else v


class ExperienceEntry(BaseModel):
    id: str | None = None
    title: str | None = None
    company: str | None = None
    location: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    description: str | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def month_values(cls, v):
        return parse_month_or_date(v)

    @model_validator(mode="after")
    def end_after_start(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must be after start date")
        return self


class CertificationEntry(BaseModel):
    id: str | None = None
    name: str | None = None
    issuer: str | None = None
    issue_date: date | None = None
    expiry_date: date | None = None
    credential_url: str | None = None

    @field_validator("issue_date", "expiry_date", mode="before")
    @classmethod
    def month_values(cls, v):
        return parse_month_or_date(v)

    @model_validator(mode="after")
    def expiry_after_issue(self):
        if self.issue_date and self.expiry_date and self.expiry_date < self.issue_date:
            raise ValueError("Expiry date must be after issue date")
        return self


class ProfileUpdate(BaseModel):
    """Partial update: only keys present in the request body are applied."""

    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    education: list[EducationEntry] | None = None
    experience: list[ExperienceEntry] | None = None
    certifications: list[CertificationEntry] | None = None
    skills: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def email_is_immutable(cls, data):
        if isinstance(data, dict) and "email" in data:
            raise ValueError("Email cannot be modified")
        return data

    @field_validator("phone")
    @classmethod
    def phone_format(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not PHONE_RE.match(v):
            raise ValueError("Invalid phone number format")
        return v

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def dob_text(cls, v):
        return parse_month_or_date(v)

    @field_validator("date_of_birth")
    @classmethod
    def dob_range(cls, v: date | None) -> date | None:
        if v is None:
            return v
        today = date.today()
        if v > today:
            raise ValueError("Date of birth cannot be in the future")
        age = today.year - v.year - ((today.month, today.day) < (v.month, v.day))
        if age > MAX_AGE_YEARS:
            raise ValueError("Invalid date of birth")
        return v

    @field_validator("gender")
    @classmethod
    def gender_known(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip().lower()
        if v not in GENDERS:
            raise ValueError("Gender must be male, female or other")
        return v

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip() if v else v
