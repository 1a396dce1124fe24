from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from jobboard.models.enums import ApprovalStatus


class CompanyRegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)
    address: str = Field(min_length=1, max_length=500)
    logo: str = ""
    license_url: str = ""
    about: str | None = None


class CompanyStatusUpdate(BaseModel):
    status: ApprovalStatus
    reason: str | None = Field(default=None, max_length=2000)


class CompanyOut(BaseModel):
    id: int
    name: str
    admin_id: int | None = None
    admin_email: str
    address: str
    logo: str
    license_url: str
    about: str | None = None
    status: ApprovalStatus
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class CompanyRegisterResponse(BaseModel):
    message: str
    company: CompanyOut
    admin_id: int
