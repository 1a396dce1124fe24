from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON

from jobboard.database import Base
from jobboard.models.enums import ApplicationStatus


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("user_id", "job_id", name="uq_application_user_job"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    year_of_birth = Column(Integer, nullable=False)
    address = Column(String(500), nullable=False)
    phone = Column(String(50), nullable=False)
    portfolio = Column(String(1000))
    profession = Column(String(255), nullable=False)
    career_level = Column(String(100), nullable=False)
    cover_letter = Column(Text, nullable=False)
    experiences = Column(JSON, nullable=False)
    degree_type = Column(String(100), nullable=False)
    institution = Column(String(255), nullable=False)
    graduation_date = Column(Date, nullable=False)
    skills = Column(JSON, nullable=False)
    certifications = Column(JSON, nullable=False)
    languages = Column(JSON, nullable=False)
    projects = Column(Text)
    volunteer_work = Column(Text)
    resume_url = Column(String(1000))
    status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING.value)
    created_at = Column(DateTime, server_default=func.now())

    job = relationship("Job")
