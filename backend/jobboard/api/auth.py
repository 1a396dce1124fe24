from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.auth import Actor, get_current_actor
from jobboard.database import get_db
from jobboard.dependencies import get_oauth_client
from jobboard.models.user import User
from jobboard.schemas.auth import (
    AdminCreateRequest,
    AuthResponse,
    LoginRequest,
    OAuthLoginRequest,
    ProfileUpdate,
    SignupRequest,
    UserOut,
)
from jobboard.services.accounts import AccountService, issue_token
from jobboard.services.oauth import OAuthClient


router = APIRouter()
users_router = APIRouter()
accounts = AccountService()


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=issue_token(user),
        user_id=user.id,
        role=user.role,
        company_id=user.company_id,
    )


def user_to_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        company_id=user.company_id,
        study_area=user.study_area or [],
    )


@router.post("/signup", response_model=AuthResponse, status_code=201)
def signup(payload: SignupRequest, db: Session = Depends(get_db)) -> AuthResponse:
    return _auth_response(accounts.signup(db, payload))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    return _auth_response(accounts.login(db, payload.email, payload.password))


@router.post("/oauth/{provider}", response_model=AuthResponse)
def oauth_login(
    provider: str,
    payload: OAuthLoginRequest,
    db: Session = Depends(get_db),
    oauth_client: OAuthClient = Depends(get_oauth_client),
) -> AuthResponse:
    service = AccountService(oauth_client)
    return _auth_response(service.oauth_login(db, provider.lower(), payload.access_token))


@router.get("/me", response_model=UserOut)
def me(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)) -> UserOut:
    return user_to_out(accounts.get_user(db, actor))


@router.post("/admins", response_model=UserOut, status_code=201)
def create_admin(
    payload: AdminCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> UserOut:
    return user_to_out(accounts.create_admin(db, payload, actor))


@users_router.get("/me", response_model=UserOut)
def get_profile(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)) -> UserOut:
    return user_to_out(accounts.get_user(db, actor))


@users_router.put("/me", response_model=UserOut)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
) -> UserOut:
    return user_to_out(accounts.update_profile(db, payload, actor))
