from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.auth import Actor, get_current_actor, get_optional_actor
from jobboard.database import get_db
from jobboard.models.enums import ApprovalStatus
from jobboard.schemas.job import CompanyJobsOut, JobCreate, JobOut, JobStatusUpdate, JobUpdate
from jobboard.services.jobs import JobWorkflow, job_to_out, jobs_to_out


router = APIRouter()
workflow = JobWorkflow()


@router.get("", response_model=list[JobOut])
def list_jobs(area: str | None = None, db: Session = Depends(get_db)) -> list[JobOut]:
    return jobs_to_out(db, workflow.list_public(db, area))


@router.get("/recommended", response_model=list[JobOut])
def recommended_jobs(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)) -> list[JobOut]:
    return jobs_to_out(db, workflow.recommended(db, actor))


@router.get("/admin", response_model=list[JobOut])
def list_jobs_for_admin(
    status: ApprovalStatus | None = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> list[JobOut]:
    return jobs_to_out(db, workflow.list_for_admin(db, actor, status))


@router.get("/company", response_model=CompanyJobsOut)
def list_company_jobs(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)) -> CompanyJobsOut:
    company, jobs = workflow.list_for_company(db, actor)
    return CompanyJobsOut(company_name=company.name, jobs=jobs_to_out(db, jobs))


@router.get("/{job_id}", response_model=JobOut)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    actor: Actor | None = Depends(get_optional_actor),
) -> JobOut:
    return job_to_out(db, workflow.get_visible(db, job_id, actor))


@router.post("", response_model=JobOut, status_code=201)
def create_job(payload: JobCreate, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)) -> JobOut:
    return job_to_out(db, workflow.create(db, payload, actor))


@router.put("/{job_id}", response_model=JobOut)
def update_job(
    job_id: int,
    payload: JobUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> JobOut:
    return job_to_out(db, workflow.update(db, job_id, payload, actor))


@router.patch("/{job_id}/status", response_model=JobOut)
def update_job_status(
    job_id: int,
    payload: JobStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> JobOut:
    return job_to_out(db, workflow.set_status(db, job_id, payload.status, actor))


@router.delete("/{job_id}")
def delete_job(job_id: int, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)) -> dict[str, str | int]:
    workflow.delete(db, job_id, actor)
    return {"status": "deleted", "job_id": job_id}
