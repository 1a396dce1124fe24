from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.auth import Actor, get_current_actor
from jobboard.database import get_db
from jobboard.models.application import Application
from jobboard.schemas.application import (
    ApplicantSummaryOut,
    ApplicationCheckOut,
    ApplicationCreate,
    ApplicationCreated,
    ApplicationOut,
    ApplicationStatusUpdate,
    AppliedJobOut,
)
from jobboard.services.applications import ApplicationWorkflow


router = APIRouter()
workflow = ApplicationWorkflow()


@router.post("", response_model=ApplicationCreated, status_code=201)
def create_application(
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> ApplicationCreated:
    application = workflow.create(db, payload, actor)
    return ApplicationCreated(application_id=application.id)


@router.get("/me", response_model=list[AppliedJobOut])
def list_my_applications(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)) -> list[AppliedJobOut]:
    return [
        AppliedJobOut(
            id=application.id,
            job_id=application.job_id,
            title=application.job.title,
            company=application.job.company.name,
            status=application.status,
            created_at=application.created_at,
        )
        for application in workflow.list_for_user(db, actor)
    ]


@router.get("/check", response_model=ApplicationCheckOut)
def check_application(
    job_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> ApplicationCheckOut:
    return ApplicationCheckOut(has_applied=workflow.has_applied(db, job_id, actor))


@router.get("/admin", response_model=list[ApplicationOut])
def list_all_applications(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)) -> list[Application]:
    return workflow.list_all(db, actor)


@router.get("/job/{job_id}", response_model=list[ApplicantSummaryOut])
def list_job_applicants(
    job_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> list[Application]:
    return workflow.list_for_job(db, job_id, actor)


@router.get("/{application_id}", response_model=ApplicationOut)
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> Application:
    return workflow.get(db, application_id, actor)


@router.patch("/{application_id}/status", response_model=ApplicationOut)
def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> Application:
    return workflow.set_status(db, application_id, payload.status, actor)
