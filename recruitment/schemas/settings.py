from pydantic import BaseModel, field_validator, model_validator


class NamedCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v


class NamedUpdate(BaseModel):
    """Either toggles is_active or renames; a name wins when both are sent."""

    id: str
    name: str | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty")
        return v

    @model_validator(mode="after")
    def something_to_change(self):
        if self.name is None and self.is_active is None:
            raise ValueError("Provide a name or is_active")
        return self


class ExperienceLevelCreate(BaseModel):
    level_id: str
    label: str
    year_range: str

    @field_validator("level_id", "label", "year_range")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Level ID, label and year range are required")
        return v


class ExperienceLevelUpdate(BaseModel):
    id: str
    level_id: str | None = None
    label: str | None = None
    year_range: str | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def something_to_change(self):
        if all(v is None for v in (self.level_id, self.label, self.year_range, self.is_active)):
            raise ValueError("Nothing to update")
        return self
