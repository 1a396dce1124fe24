from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from jobboard.database import Base
from jobboard.models.enums import ApprovalStatus


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    admin_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), unique=True)
    admin_email = Column(String(255), unique=True, nullable=False)
    address = Column(String(500), nullable=False)
    logo = Column(String(1000), nullable=False, default="")
    license_url = Column(String(1000), nullable=False, default="")
    about = Column(Text)
    status = Column(String(20), nullable=False, default=ApprovalStatus.PENDING.value, index=True)
    created_at = Column(DateTime, server_default=func.now())

    admin = relationship("User", back_populates="company")
    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan", passive_deletes=True)
