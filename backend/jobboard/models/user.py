from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON

from jobboard.database import Base
from jobboard.models.enums import Role


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255))
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(512))
    role = Column(String(20), nullable=False, default=Role.JOB_SEEKER.value)
    study_area = Column(JSON)
    created_at = Column(DateTime, server_default=func.now())

    company = relationship("Company", back_populates="admin", uselist=False)
    oauth_accounts = relationship("OAuthAccount", back_populates="user", passive_deletes=True)

    @property
    def company_id(self) -> int | None:
        return self.company.id if self.company is not None else None


class OAuthAccount(Base):
    __tablename__ = "oauth_accounts"
    __table_args__ = (UniqueConstraint("provider", "provider_account_id", name="uq_oauth_provider_account"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    provider = Column(String(50), nullable=False)
    provider_account_id = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="oauth_accounts")
