from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from jobboard.auth import Actor, require_role
from jobboard.database import unit_of_work
from jobboard.errors import AuthorizationError, NotFoundError, ValidationError
from jobboard.models.application import Application
from jobboard.models.bookmark import Bookmark
from jobboard.models.company import Company
from jobboard.models.enums import ApprovalStatus, Role
from jobboard.models.job import Job, Qualification, RequiredSkill, Responsibility
from jobboard.models.user import User
from jobboard.schemas.job import JobCreate, JobOut, JobUpdate


logger = logging.getLogger(__name__)

# Deletion order for a job's dependents; the job row itself goes last.
JOB_DEPENDENTS = (Qualification, Responsibility, RequiredSkill, Application, Bookmark)


def _job_query(db: Session):
    return db.query(Job).options(
        selectinload(Job.company),
        selectinload(Job.qualifications),
        selectinload(Job.responsibilities),
        selectinload(Job.required_skills),
    )


def _application_counts(db: Session, job_ids: list[int]) -> dict[int, int]:
    if not job_ids:
        return {}
    rows = (
        db.query(Application.job_id, func.count(Application.id))
        .filter(Application.job_id.in_(job_ids))
        .group_by(Application.job_id)
        .all()
    )
    return {job_id: count for job_id, count in rows}


def jobs_to_out(db: Session, jobs: list[Job]) -> list[JobOut]:
    counts = _application_counts(db, [job.id for job in jobs])
    return [
        JobOut(
            id=job.id,
            title=job.title,
            company_id=job.company_id,
            company_name=job.company.name,
            logo=job.company.logo or None,
            area=job.area,
            location=job.location,
            deadline=job.deadline,
            site=job.site,
            about_job=job.about_job,
            status=job.status,
            created_at=job.created_at,
            qualifications=[item.value for item in job.qualifications],
            responsibilities=[item.value for item in job.responsibilities],
            required_skills=[item.value for item in job.required_skills],
            application_count=counts.get(job.id, 0),
        )
        for job in jobs
    ]


def job_to_out(db: Session, job: Job) -> JobOut:
    return jobs_to_out(db, [job])[0]


def _child_rows(model, values: list[str]) -> list:
    return [model(position=index, value=value) for index, value in enumerate(values)]


class JobWorkflow:
    """Job posting, approval, editing and removal."""

    def create(self, db: Session, payload: JobCreate, actor: Actor) -> Job:
        require_role(actor, Role.COMPANY_ADMIN)
        company = db.query(Company).filter(Company.admin_id == actor.user_id).first()
        if not company or company.status != ApprovalStatus.APPROVED.value:
            raise AuthorizationError("Company not approved")

        job = Job(
            title=payload.title,
            company_id=company.id,
            area=payload.area,
            location=payload.location,
            deadline=payload.deadline,
            site=payload.site.value,
            about_job=payload.about_job,
            status=ApprovalStatus.PENDING.value,
            qualifications=_child_rows(Qualification, payload.qualifications),
            responsibilities=_child_rows(Responsibility, payload.responsibilities),
            required_skills=_child_rows(RequiredSkill, payload.required_skills),
        )
        with unit_of_work(db):
            db.add(job)
        db.refresh(job)
        logger.info("Company %s created job %s pending approval", company.id, job.id)
        return job

    def update(self, db: Session, job_id: int, payload: JobUpdate, actor: Actor) -> Job:
        require_role(actor, Role.ADMIN)
        job = db.query(Job).filter(Job.id == job_id).first()
        if not job:
            raise NotFoundError("Job not found")
        if not db.query(Company.id).filter(Company.id == payload.company_id).first():
            raise ValidationError("Invalid company_id: company does not exist")

        with unit_of_work(db):
            for model in (Qualification, Responsibility, RequiredSkill):
                db.query(model).filter(model.job_id == job_id).delete(synchronize_session=False)
            db.expire(job, ["qualifications", "responsibilities", "required_skills"])

            job.title = payload.title
            job.company_id = payload.company_id
            job.area = payload.area
            job.location = payload.location
            job.deadline = payload.deadline
            job.site = payload.site.value
            job.about_job = payload.about_job
            job.status = payload.status.value
            for model, values in (
                (Qualification, payload.qualifications),
                (Responsibility, payload.responsibilities),
                (RequiredSkill, payload.required_skills),
            ):
                for row in _child_rows(model, values):
                    row.job_id = job_id
                    db.add(row)
        db.refresh(job)
        logger.info("Job %s updated by admin %s", job_id, actor.user_id)
        return job

    def delete(self, db: Session, job_id: int, actor: Actor) -> None:
        require_role(actor, Role.ADMIN)
        if not db.query(Job.id).filter(Job.id == job_id).first():
            raise NotFoundError("Job not found")

        with unit_of_work(db):
            for model in JOB_DEPENDENTS:
                db.query(model).filter(model.job_id == job_id).delete(synchronize_session=False)
            db.query(Job).filter(Job.id == job_id).delete(synchronize_session=False)
        logger.info("Job %s deleted by admin %s", job_id, actor.user_id)

    def set_status(self, db: Session, job_id: int, new_status: ApprovalStatus | str, actor: Actor) -> Job:
        require_role(actor, Role.ADMIN)
        try:
            target = ApprovalStatus(new_status)
        except ValueError:
            raise ValidationError("Invalid status value") from None

        job = db.query(Job).filter(Job.id == job_id).first()
        if not job:
            raise NotFoundError("Job not found")

        previous = job.status
        with unit_of_work(db):
            job.status = target.value
        db.refresh(job)
        logger.info("Job %s status %s -> %s by admin %s", job_id, previous, target.value, actor.user_id)
        return job

    def list_public(self, db: Session, area: str | None = None) -> list[Job]:
        query = _job_query(db).filter(Job.status == ApprovalStatus.APPROVED.value)
        if area:
            query = query.filter(Job.area == area)
        return query.order_by(Job.created_at.desc(), Job.id.desc()).all()

    def get_visible(self, db: Session, job_id: int, actor: Actor | None = None) -> Job:
        query = _job_query(db).filter(Job.id == job_id)
        if actor is None or not actor.is_admin:
            query = query.filter(Job.status == ApprovalStatus.APPROVED.value)
        job = query.first()
        if not job:
            raise NotFoundError("Job not found")
        return job

    def recommended(self, db: Session, actor: Actor) -> list[Job]:
        user = db.query(User).filter(User.id == actor.user_id).first()
        if not user:
            raise NotFoundError("User not found")
        areas = [area for area in (user.study_area or []) if area]
        query = _job_query(db).filter(Job.status == ApprovalStatus.APPROVED.value)
        if areas:
            query = query.filter(Job.area.in_(areas))
        return query.order_by(Job.created_at.desc(), Job.id.desc()).all()

    def list_for_admin(self, db: Session, actor: Actor, status: ApprovalStatus | None = None) -> list[Job]:
        require_role(actor, Role.ADMIN)
        query = _job_query(db)
        if status is not None:
            query = query.filter(Job.status == status.value)
        return query.order_by(Job.created_at.desc(), Job.id.desc()).all()

    def list_for_company(self, db: Session, actor: Actor) -> tuple[Company, list[Job]]:
        require_role(actor, Role.COMPANY_ADMIN)
        company = db.query(Company).filter(Company.admin_id == actor.user_id).first()
        if not company:
            raise NotFoundError("No company found for this account")
        jobs = _job_query(db).filter(Job.company_id == company.id).order_by(Job.created_at.desc(), Job.id.desc()).all()
        return company, jobs
