from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, HttpUrl, field_validator

from jobboard.models.enums import ApplicationStatus


class Experience(BaseModel):
    job_title: str = Field(min_length=1)
    company_name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    responsibilities: str = Field(min_length=1)


class ApplicationCreate(BaseModel):
    job_id: int
    full_name: str = Field(min_length=1, max_length=255)
    year_of_birth: int = Field(ge=1900)
    address: str = Field(min_length=1, max_length=500)
    phone: str = Field(min_length=1, max_length=50)
    portfolio: HttpUrl | None = None
    profession: str = Field(min_length=1, max_length=255)
    career_level: str = Field(min_length=1, max_length=100)
    cover_letter: str = Field(min_length=1)
    experiences: list[Experience] = Field(min_length=1)
    degree_type: str = Field(min_length=1, max_length=100)
    institution: str = Field(min_length=1, max_length=255)
    graduation_date: date
    skills: list[str] = Field(default_factory=list, max_length=5)
    certifications: list[str] = Field(default_factory=list, max_length=5)
    languages: list[str] = Field(default_factory=list, max_length=5)
    projects: str | None = None
    volunteer_work: str | None = None
    resume_url: str | None = Field(default=None, min_length=1)

    @field_validator("year_of_birth")
    @classmethod
    def _not_in_future(cls, value: int) -> int:
        if value > date.today().year:
            raise ValueError("year of birth cannot be in the future")
        return value


class ApplicationCreated(BaseModel):
    message: str = "Application submitted successfully"
    application_id: int


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicationOut(BaseModel):
    id: int
    user_id: int
    job_id: int
    full_name: str
    email: str
    year_of_birth: int
    address: str
    phone: str
    portfolio: str | None = None
    profession: str
    career_level: str
    cover_letter: str
    experiences: list[Experience]
    degree_type: str
    institution: str
    graduation_date: date
    skills: list[str]
    certifications: list[str]
    languages: list[str]
    projects: str | None = None
    volunteer_work: str | None = None
    resume_url: str | None = None
    status: ApplicationStatus
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class AppliedJobOut(BaseModel):
    id: int
    job_id: int
    title: str
    company: str
    status: ApplicationStatus
    created_at: datetime | None = None


class ApplicantSummaryOut(BaseModel):
    id: int
    full_name: str
    email: str
    career_level: str
    degree_type: str
    skills: list[str]
    certifications: list[str]
    languages: list[str]
    status: ApplicationStatus
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ApplicationCheckOut(BaseModel):
    has_applied: bool
