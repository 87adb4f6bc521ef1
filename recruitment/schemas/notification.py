from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator

from recruitment.core.pipeline import NOTIFY_STATUSES


class StatusEmail(BaseModel):
    to: EmailStr
    job_title: str = Field(min_length=1, validation_alias=AliasChoices("job_title", "jobTitle"))
    applicant_name: str = Field(min_length=1, validation_alias=AliasChoices("applicant_name", "applicantName"))
    status: str

    @field_validator("status")
    @classmethod
    def status_has_template(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in NOTIFY_STATUSES:
            raise ValueError("Status must be 'shortlisted' or 'rejected'")
        return v


class MassStatusEmail(BaseModel):
    recipients: list[StatusEmail]

    @field_validator("recipients")
    @classmethod
    def not_empty(cls, v: list[StatusEmail]) -> list[StatusEmail]:
        if not v:
            raise ValueError("Recipients array is required and must not be empty")
        return v
