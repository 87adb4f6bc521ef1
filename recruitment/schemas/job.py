from datetime import date

from pydantic import AliasChoices, BaseModel, Field, field_validator


def _clean_items(v: list[str]) -> list[str]:
    return [item.strip() for item in v if item and item.strip()]


class JobPayload(BaseModel):
    """Body of POST /api/jobs and PUT /api/jobs/{id}. Every field is replaced on update."""

    title: str
    department_id: str
    employment_type_id: str
    education_level_id: str
    experience_level_id: str
    closing_date: date
    description: str
    responsibilities: list[str]
    qualifications: list[str]
    skills: list[str]
    terms_and_conditions: str = Field(validation_alias=AliasChoices("terms_and_conditions", "termsAndConditions"))
    additional_information: str | None = Field(
        default=None,
        validation_alias=AliasChoices("additional_information", "additionalInformation"),
    )

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Job title is required")
        return v

    @field_validator("closing_date")
    @classmethod
    def closing_in_future(cls, v: date) -> date:
        if v <= date.today():
            raise ValueError("Closing date must be in the future")
        return v

    @field_validator("description")
    @classmethod
    def description_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 100:
            raise ValueError("Description must be at least 100 characters")
        return v

    @field_validator("responsibilities")
    @classmethod
    def responsibilities_present(cls, v: list[str]) -> list[str]:
        v = _clean_items(v)
        if not v:
            raise ValueError("At least one responsibility is required")
        return v

    @field_validator("qualifications")
    @classmethod
    def qualifications_present(cls, v: list[str]) -> list[str]:
        v = _clean_items(v)
        if not v:
            raise ValueError("At least one qualification is required")
        return v

    @field_validator("skills")
    @classmethod
    def skills_present(cls, v: list[str]) -> list[str]:
        v = _clean_items(v)
        if not v:
            raise ValueError("At least one skill is required")
        return v

    @field_validator("terms_and_conditions")
    @classmethod
    def terms_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 50:
            raise ValueError("Terms and conditions must be at least 50 characters")
        return v

