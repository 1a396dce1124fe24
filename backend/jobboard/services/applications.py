from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from jobboard.auth import Actor, require_role
from jobboard.database import unit_of_work
from jobboard.errors import AuthenticationError, AuthorizationError, ConflictError, NotFoundError, ValidationError
from jobboard.models.application import Application
from jobboard.models.company import Company
from jobboard.models.enums import ApplicationStatus, ApprovalStatus, Role
from jobboard.models.job import Job
from jobboard.models.user import User
from jobboard.schemas.application import ApplicationCreate


logger = logging.getLogger(__name__)

ALREADY_APPLIED = "You have already applied to this job"


def _owning_admin_id(application: Application) -> int | None:
    company = application.job.company if application.job is not None else None
    return company.admin_id if company is not None else None


class ApplicationWorkflow:
    """Job applications and their review status."""

    def create(self, db: Session, payload: ApplicationCreate, actor: Actor) -> Application:
        require_role(actor, Role.JOB_SEEKER)
        user = db.query(User).filter(User.id == actor.user_id).first()
        if not user:
            raise AuthenticationError()

        job = (
            db.query(Job)
            .filter(Job.id == payload.job_id, Job.status == ApprovalStatus.APPROVED.value)
            .first()
        )
        if not job:
            raise NotFoundError("Job not found")

        existing = (
            db.query(Application.id)
            .filter(Application.user_id == actor.user_id, Application.job_id == payload.job_id)
            .first()
        )
        if existing:
            raise ConflictError(ALREADY_APPLIED)

        application = Application(
            user_id=actor.user_id,
            job_id=payload.job_id,
            full_name=payload.full_name,
            email=user.email,
            year_of_birth=payload.year_of_birth,
            address=payload.address,
            phone=payload.phone,
            portfolio=str(payload.portfolio) if payload.portfolio else None,
            profession=payload.profession,
            career_level=payload.career_level,
            cover_letter=payload.cover_letter,
            experiences=[experience.model_dump() for experience in payload.experiences],
            degree_type=payload.degree_type,
            institution=payload.institution,
            graduation_date=payload.graduation_date,
            skills=payload.skills,
            certifications=payload.certifications,
            languages=payload.languages,
            projects=payload.projects,
            volunteer_work=payload.volunteer_work,
            resume_url=payload.resume_url,
            status=ApplicationStatus.PENDING.value,
        )
        try:
            with unit_of_work(db):
                db.add(application)
        except IntegrityError as exc:
            # Lost a race with a concurrent submission for the same job.
            raise ConflictError(ALREADY_APPLIED) from exc

        db.refresh(application)
        logger.info("User %s applied to job %s (application %s)", actor.user_id, payload.job_id, application.id)
        return application

    def set_status(
        self,
        db: Session,
        application_id: int,
        new_status: ApplicationStatus | str,
        actor: Actor,
    ) -> Application:
        require_role(actor, Role.COMPANY_ADMIN)
        try:
            target = ApplicationStatus(new_status)
        except ValueError:
            raise ValidationError("Invalid status value") from None

        application = (
            db.query(Application)
            .options(selectinload(Application.job).selectinload(Job.company))
            .filter(Application.id == application_id)
            .first()
        )
        if not application:
            raise NotFoundError("Application not found")
        if _owning_admin_id(application) != actor.user_id:
            raise AuthorizationError("Unauthorized to update this application")

        previous = application.status
        with unit_of_work(db):
            application.status = target.value
        db.refresh(application)
        logger.info(
            "Application %s status %s -> %s by company admin %s",
            application_id,
            previous,
            target.value,
            actor.user_id,
        )
        return application

    def get(self, db: Session, application_id: int, actor: Actor) -> Application:
        application = (
            db.query(Application)
            .options(selectinload(Application.job).selectinload(Job.company))
            .filter(Application.id == application_id)
            .first()
        )
        if not application:
            raise NotFoundError("Application not found")
        allowed = (
            actor.is_admin
            or application.user_id == actor.user_id
            or (actor.role == Role.COMPANY_ADMIN and _owning_admin_id(application) == actor.user_id)
        )
        if not allowed:
            raise AuthorizationError("Unauthorized to view this application")
        return application

    def list_for_user(self, db: Session, actor: Actor) -> list[Application]:
        require_role(actor, Role.JOB_SEEKER)
        return (
            db.query(Application)
            .options(selectinload(Application.job).selectinload(Job.company))
            .filter(Application.user_id == actor.user_id)
            .order_by(Application.created_at.desc(), Application.id.desc())
            .all()
        )

    def has_applied(self, db: Session, job_id: int, actor: Actor) -> bool:
        return (
            db.query(Application.id)
            .filter(Application.user_id == actor.user_id, Application.job_id == job_id)
            .first()
            is not None
        )

    def list_for_job(self, db: Session, job_id: int, actor: Actor) -> list[Application]:
        require_role(actor, Role.COMPANY_ADMIN)
        job = (
            db.query(Job)
            .join(Company, Company.id == Job.company_id)
            .filter(Job.id == job_id, Company.admin_id == actor.user_id)
            .first()
        )
        if not job:
            raise NotFoundError(f"Job with ID {job_id} not found")
        return (
            db.query(Application)
            .filter(Application.job_id == job_id)
            .order_by(Application.created_at.desc(), Application.id.desc())
            .all()
        )

    def list_all(self, db: Session, actor: Actor) -> list[Application]:
        require_role(actor, Role.ADMIN)
        return db.query(Application).order_by(Application.created_at.desc(), Application.id.desc()).all()
