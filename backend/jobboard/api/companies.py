from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.auth import Actor, get_current_actor
from jobboard.database import get_db
from jobboard.dependencies import get_blob_store, get_notifier
from jobboard.models.company import Company
from jobboard.models.enums import ApprovalStatus
from jobboard.schemas.company import CompanyOut, CompanyRegisterRequest, CompanyRegisterResponse, CompanyStatusUpdate
from jobboard.services.blob_store import BlobStore
from jobboard.services.companies import CompanyWorkflow
from jobboard.services.notifier import Notifier


router = APIRouter()


def get_company_workflow(
    notifier: Notifier = Depends(get_notifier),
    blob_store: BlobStore = Depends(get_blob_store),
) -> CompanyWorkflow:
    return CompanyWorkflow(notifier, blob_store)


@router.post("/register", response_model=CompanyRegisterResponse, status_code=201)
def register_company(
    payload: CompanyRegisterRequest,
    db: Session = Depends(get_db),
    workflow: CompanyWorkflow = Depends(get_company_workflow),
) -> CompanyRegisterResponse:
    company = workflow.register(db, payload)
    return CompanyRegisterResponse(
        message="Company registered successfully! Please wait for admin approval before posting jobs.",
        company=CompanyOut.model_validate(company),
        admin_id=company.admin_id,
    )


@router.get("", response_model=list[CompanyOut])
def list_companies(
    status: ApprovalStatus | None = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    workflow: CompanyWorkflow = Depends(get_company_workflow),
) -> list[Company]:
    return workflow.list_companies(db, actor, status)


@router.get("/me", response_model=CompanyOut)
def get_own_company(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    workflow: CompanyWorkflow = Depends(get_company_workflow),
) -> Company:
    return workflow.get_own_company(db, actor)


@router.get("/{company_id}", response_model=CompanyOut)
def get_company(
    company_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    workflow: CompanyWorkflow = Depends(get_company_workflow),
) -> Company:
    return workflow.get_company(db, company_id, actor)


@router.patch("/{company_id}/status", response_model=CompanyOut)
def update_company_status(
    company_id: int,
    payload: CompanyStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    workflow: CompanyWorkflow = Depends(get_company_workflow),
) -> Company:
    return workflow.set_status(db, company_id, payload.status, actor, payload.reason)


@router.delete("/{company_id}")
def delete_company(
    company_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    workflow: CompanyWorkflow = Depends(get_company_workflow),
) -> dict[str, str | int]:
    workflow.delete(db, company_id, actor)
    return {"status": "deleted", "company_id": company_id}
