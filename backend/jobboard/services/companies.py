from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.auth import Actor, hash_password, require_role
from jobboard.database import unit_of_work
from jobboard.errors import ConflictError, NotFoundError, ValidationError
from jobboard.models.company import Company
from jobboard.models.enums import ApprovalStatus, Role
from jobboard.models.user import User
from jobboard.schemas.company import CompanyRegisterRequest
from jobboard.services.blob_store import BlobStore
from jobboard.services.notifier import Notifier


logger = logging.getLogger(__name__)

SETTABLE_COMPANY_STATUSES = {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED}


class CompanyWorkflow:
    """Company registration, approval and removal."""

    def __init__(self, notifier: Notifier, blob_store: BlobStore) -> None:
        self.notifier = notifier
        self.blob_store = blob_store

    def register(self, db: Session, payload: CompanyRegisterRequest) -> Company:
        email = payload.email.strip().lower()
        if db.query(Company).filter(Company.admin_email == email).first():
            raise ConflictError("Company with this email already exists")
        if db.query(User).filter(User.email == email).first():
            raise ConflictError("User with this email already exists")

        admin = User(
            name=payload.name,
            email=email,
            password_hash=hash_password(payload.password),
            role=Role.COMPANY_ADMIN.value,
        )
        company = Company(
            name=payload.name,
            admin=admin,
            admin_email=email,
            address=payload.address,
            logo=payload.logo or "",
            license_url=payload.license_url or "",
            about=payload.about,
            status=ApprovalStatus.PENDING.value,
        )
        try:
            with unit_of_work(db):
                db.add(admin)
                db.add(company)
        except IntegrityError as exc:
            raise ConflictError("Company with this email already exists") from exc

        db.refresh(company)
        logger.info("Registered company %s (id=%s) pending approval", company.name, company.id)
        return company

    def set_status(
        self,
        db: Session,
        company_id: int,
        new_status: ApprovalStatus | str,
        actor: Actor,
        reason: str | None = None,
    ) -> Company:
        require_role(actor, Role.ADMIN)
        try:
            target = ApprovalStatus(new_status)
        except ValueError:
            raise ValidationError("Invalid status") from None
        if target not in SETTABLE_COMPANY_STATUSES:
            raise ValidationError("Invalid status")

        company = db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundError("Company not found")

        previous = company.status
        with unit_of_work(db):
            company.status = target.value
        db.refresh(company)
        logger.info("Company %s status %s -> %s by user %s", company.id, previous, target.value, actor.user_id)

        if previous != target.value:
            self._notify(company, target, reason)
        return company

    def _notify(self, company: Company, status: ApprovalStatus, reason: str | None) -> None:
        try:
            if status == ApprovalStatus.APPROVED:
                self.notifier.send_approval_email(company.name, company.admin_email)
            else:
                self.notifier.send_rejection_email(company.name, company.admin_email, reason)
        except Exception:
            # The transition is already committed.
            logger.warning(
                "Failed to send %s notification to %s for company %s",
                status.value.lower(),
                company.admin_email,
                company.id,
                exc_info=True,
            )

    def delete(self, db: Session, company_id: int, actor: Actor) -> None:
        require_role(actor, Role.ADMIN)
        company = db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundError("Company not found")

        admin_id = company.admin_id
        logo = company.logo
        with unit_of_work(db):
            if admin_id is not None:
                db.query(User).filter(User.id == admin_id).delete(synchronize_session=False)
            # Jobs and their children go with the company through ON DELETE CASCADE.
            db.query(Company).filter(Company.id == company_id).delete(synchronize_session=False)
        db.expunge(company)
        logger.info("Deleted company %s and admin user %s", company_id, admin_id)

        if logo:
            try:
                self.blob_store.delete(logo)
            except Exception:
                logger.warning("Failed to delete logo %s of company %s", logo, company_id, exc_info=True)

    def list_companies(self, db: Session, actor: Actor, status: ApprovalStatus | None = None) -> list[Company]:
        require_role(actor, Role.ADMIN)
        query = db.query(Company)
        if status is not None:
            query = query.filter(Company.status == status.value)
        return query.order_by(Company.created_at.desc(), Company.id.desc()).all()

    def get_company(self, db: Session, company_id: int, actor: Actor) -> Company:
        require_role(actor, Role.ADMIN)
        company = db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundError("Company not found")
        return company

    def get_own_company(self, db: Session, actor: Actor) -> Company:
        require_role(actor, Role.COMPANY_ADMIN)
        company = db.query(Company).filter(Company.admin_id == actor.user_id).first()
        if not company:
            raise NotFoundError("No company found for this account")
        return company
