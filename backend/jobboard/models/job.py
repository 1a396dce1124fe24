from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import relationship

from jobboard.database import Base
from jobboard.models.enums import ApprovalStatus


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        Index("idx_jobs_status_area", "status", "area"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    area = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    deadline = Column(Date, nullable=False)
    site = Column(String(20), nullable=False)
    about_job = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=ApprovalStatus.PENDING.value)
    created_at = Column(DateTime, server_default=func.now())

    company = relationship("Company", back_populates="jobs")
    qualifications = relationship(
        "Qualification",
        order_by="Qualification.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    responsibilities = relationship(
        "Responsibility",
        order_by="Responsibility.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    required_skills = relationship(
        "RequiredSkill",
        order_by="RequiredSkill.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Qualification(Base):
    __tablename__ = "qualifications"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    value = Column(Text, nullable=False)


class Responsibility(Base):
    __tablename__ = "responsibilities"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    value = Column(Text, nullable=False)


class RequiredSkill(Base):
    __tablename__ = "required_skills"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    value = Column(Text, nullable=False)
