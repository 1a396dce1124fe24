from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.auth import Actor, create_access_token, hash_password, require_role, verify_password
from jobboard.database import unit_of_work
from jobboard.errors import AuthenticationError, ConflictError, NotFoundError
from jobboard.models.enums import Role
from jobboard.models.user import OAuthAccount, User
from jobboard.schemas.auth import AdminCreateRequest, ProfileUpdate, SignupRequest
from jobboard.services.oauth import OAuthClient


logger = logging.getLogger(__name__)

PRIVILEGED_ROLES = {Role.ADMIN.value, Role.COMPANY_ADMIN.value}


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.role, user.company_id)


class AccountService:
    def __init__(self, oauth_client: OAuthClient | None = None) -> None:
        self.oauth_client = oauth_client or OAuthClient()

    def _create_user(self, db: Session, user: User) -> User:
        if db.query(User.id).filter(User.email == user.email).first():
            raise ConflictError("User with this email already exists")
        try:
            with unit_of_work(db):
                db.add(user)
        except IntegrityError as exc:
            raise ConflictError("User with this email already exists") from exc
        db.refresh(user)
        return user

    def signup(self, db: Session, payload: SignupRequest) -> User:
        user = User(
            name=payload.name.strip(),
            email=payload.email.strip().lower(),
            password_hash=hash_password(payload.password),
            role=Role.JOB_SEEKER.value,
            study_area=[area.strip() for area in payload.study_area if area.strip()],
        )
        user = self._create_user(db, user)
        logger.info("Job seeker %s signed up", user.id)
        return user

    def create_admin(self, db: Session, payload: AdminCreateRequest, actor: Actor) -> User:
        require_role(actor, Role.ADMIN)
        user = User(
            name=payload.name,
            email=payload.email.strip().lower(),
            password_hash=hash_password(payload.password),
            role=Role.ADMIN.value,
        )
        user = self._create_user(db, user)
        logger.info("Admin %s created admin account %s", actor.user_id, user.id)
        return user

    def login(self, db: Session, email: str, password: str) -> User:
        user = db.query(User).filter(User.email == email.strip().lower()).first()
        if not user or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        return user

    def oauth_login(self, db: Session, provider: str, access_token: str) -> User:
        profile = self.oauth_client.fetch_profile(provider, access_token)

        account = (
            db.query(OAuthAccount)
            .filter(OAuthAccount.provider == profile.provider, OAuthAccount.provider_account_id == profile.account_id)
            .first()
        )
        if account:
            return account.user

        user = db.query(User).filter(User.email == profile.email).first()
        if user is not None and user.role in PRIVILEGED_ROLES:
            # Privileged accounts sign in by password or an already linked provider account.
            logger.warning("Refused to link %s account to %s user %s", provider, user.role, user.id)
            raise AuthenticationError("Sign in with your password to use this account")

        with unit_of_work(db):
            if user is None:
                user = User(
                    name=profile.name or "Unnamed User",
                    email=profile.email,
                    role=Role.JOB_SEEKER.value,
                    study_area=[],
                )
                db.add(user)
                logger.info("Creating job seeker account for first %s login", provider)
            db.add(OAuthAccount(user=user, provider=profile.provider, provider_account_id=profile.account_id))
        db.refresh(user)
        return user

    def get_user(self, db: Session, actor: Actor) -> User:
        user = db.query(User).filter(User.id == actor.user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, db: Session, payload: ProfileUpdate, actor: Actor) -> User:
        user = self.get_user(db, actor)
        with unit_of_work(db):
            if payload.name is not None:
                user.name = payload.name.strip()
            if payload.study_area is not None:
                user.study_area = [area.strip() for area in payload.study_area if area.strip()]
        db.refresh(user)
        return user
