from pydantic import AliasChoices, BaseModel, Field, field_validator

from recruitment.core.pipeline import STATUS_VALUES, is_valid_status


def _status(v: str) -> str:
    v = (v or "").strip().lower()
    if not is_valid_status(v):
        raise ValueError(f"Invalid status. Must be one of: {', '.join(STATUS_VALUES)}")
    return v


class StatusUpdate(BaseModel):
    application_id: str = Field(validation_alias=AliasChoices("application_id", "applicationId"))
    status: str

    @field_validator("status")
    @classmethod
    def status_known(cls, v: str) -> str:
        return _status(v)


class MassStatusUpdate(BaseModel):
    job_id: str = Field(validation_alias=AliasChoices("job_id", "jobId"))
    from_status: str = Field(validation_alias=AliasChoices("from_status", "fromStatus"))
    to_status: str = Field(validation_alias=AliasChoices("to_status", "toStatus"))

    @field_validator("from_status", "to_status")
    @classmethod
    def status_known(cls, v: str) -> str:
        return _status(v)


class WithdrawRequest(BaseModel):
    application_id: str = Field(min_length=1, validation_alias=AliasChoices("application_id", "applicationId"))
