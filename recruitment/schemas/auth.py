from datetime import datetime

from pydantic import BaseModel, EmailStr, field_validator

from recruitment.models.user import ROLES


def _person_name(v: str, label: str) -> str:
    v = " ".join(v.split())
    if len(v) < 2:
        raise ValueError(f"{label} must be at least 2 characters")
    return " ".join(w[:1].upper() + w[1:].lower() for w in v.split())


def _check_password(v: str) -> str:
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    return v


def _check_role(v: str) -> str:
    v = v.strip().upper()
    if v not in ROLES:
        raise ValueError(f"Role must be one of {', '.join(ROLES)}")
    return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: str

    @field_validator("role")
    @classmethod
    def role_known(cls, v: str) -> str:
        return _check_role(v)


class UserRegister(BaseModel):
    email: EmailStr
    password: str
    first_name: str
    last_name: str

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        return _check_password(v)

    @field_validator("first_name")
    @classmethod
    def first_name_format(cls, v: str) -> str:
        return _person_name(v, "First name")

    @field_validator("last_name")
    @classmethod
    def last_name_format(cls, v: str) -> str:
        return _person_name(v, "Last name")


class UserCreate(UserRegister):
    """Staff account created by an administrator."""

    role: str
    position: str | None = None

    @field_validator("role")
    @classmethod
    def role_known(cls, v: str) -> str:
        return _check_role(v)


class UserUpdate(BaseModel):
    email: EmailStr | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    position: str | None = None
    is_active: bool | None = None

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str | None) -> str | None:
        return _check_password(v) if v is not None else v

    @field_validator("first_name")
    @classmethod
    def first_name_format(cls, v: str | None) -> str | None:
        return _person_name(v, "First name") if v is not None else v

    @field_validator("last_name")
    @classmethod
    def last_name_format(cls, v: str | None) -> str | None:
        return _person_name(v, "Last name") if v is not None else v

    @field_validator("role")
    @classmethod
    def role_known(cls, v: str | None) -> str | None:
        return _check_role(v) if v is not None else v


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    position: str | None = None
    is_active: bool = True
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
