from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from jobboard.models.enums import Role


class SignupRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)
    study_area: list[str] = Field(default_factory=list)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=256)


class OAuthLoginRequest(BaseModel):
    access_token: str = Field(min_length=1)


class AdminCreateRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: Role
    company_id: int | None = None


class UserOut(BaseModel):
    id: int
    name: str | None = None
    email: str
    role: Role
    company_id: int | None = None
    study_area: list[str] = Field(default_factory=list)


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    study_area: list[str] | None = None
