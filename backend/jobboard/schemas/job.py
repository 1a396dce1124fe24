from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from jobboard.models.enums import ApprovalStatus, JobSite


def _reject_blank_entries(values: list[str]) -> list[str]:
    cleaned = [value.strip() for value in values]
    if any(not value for value in cleaned):
        raise ValueError("entries must not be empty")
    return cleaned


class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    area: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)
    deadline: date
    site: JobSite
    about_job: str = Field(min_length=1)
    qualifications: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    required_skills: list[str] = Field(default_factory=list)

    @field_validator("qualifications", "responsibilities", "required_skills")
    @classmethod
    def _no_blank_entries(cls, values: list[str]) -> list[str]:
        return _reject_blank_entries(values)


class JobUpdate(JobCreate):
    company_id: int
    status: ApprovalStatus
    qualifications: list[str] = Field(min_length=1)
    responsibilities: list[str] = Field(min_length=1)
    required_skills: list[str] = Field(min_length=1)


class JobStatusUpdate(BaseModel):
    status: ApprovalStatus


class JobOut(BaseModel):
    id: int
    title: str
    company_id: int
    company_name: str
    logo: str | None = None
    area: str
    location: str
    deadline: date
    site: JobSite
    about_job: str
    status: ApprovalStatus
    created_at: datetime | None = None
    qualifications: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    required_skills: list[str] = Field(default_factory=list)
    application_count: int = 0


class CompanyJobsOut(BaseModel):
    company_name: str
    jobs: list[JobOut]
