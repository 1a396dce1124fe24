from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time
from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jobboard.config import settings
from jobboard.errors import AuthenticationError, AuthorizationError
from jobboard.models.enums import Role


security = HTTPBearer(auto_error=False)
DEFAULT_ITERATIONS = 210_000


@dataclass(frozen=True)
class Actor:
    """Identity of the caller, resolved from the session token."""

    user_id: int
    role: Role
    company_id: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def require_role(actor: Actor, *roles: Role) -> None:
    if actor.role not in roles:
        raise AuthorizationError("Insufficient permissions")


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        DEFAULT_ITERATIONS,
    ).hex()
    return f"pbkdf2_sha256${DEFAULT_ITERATIONS}${salt}${digest}"


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        _, iterations_str, salt, digest = password_hash.split("$", 3)
        iterations = int(iterations_str)
    except ValueError:
        return False
    expected = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    ).hex()
    return hmac.compare_digest(expected, digest)


def _sign(payload: str) -> str:
    return hmac.new(settings.auth_secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def create_access_token(user_id: int, role: Role | str, company_id: int | None = None) -> str:
    exp = int(time.time()) + settings.auth_token_ttl_seconds
    nonce = secrets.token_hex(6)
    role_value = Role(role).value
    payload = f"{user_id}:{role_value}:{company_id or ''}:{exp}:{nonce}"
    token_raw = f"{payload}:{_sign(payload)}".encode("utf-8")
    return base64.urlsafe_b64encode(token_raw).decode("utf-8").rstrip("=")


def decode_access_token(token: str) -> Actor | None:
    if not token:
        return None
    padding = "=" * (-len(token) % 4)
    try:
        decoded = base64.urlsafe_b64decode((token + padding).encode("utf-8")).decode("utf-8")
        user_id_str, role_str, company_id_str, exp_str, nonce, signature = decoded.split(":", 5)
        payload = f"{user_id_str}:{role_str}:{company_id_str}:{exp_str}:{nonce}"
    except (ValueError, UnicodeDecodeError):
        return None

    if not hmac.compare_digest(_sign(payload), signature):
        return None

    try:
        exp = int(exp_str)
        user_id = int(user_id_str)
        role = Role(role_str)
        company_id = int(company_id_str) if company_id_str else None
    except ValueError:
        return None
    if exp < int(time.time()):
        return None
    return Actor(user_id=user_id, role=role, company_id=company_id)


def get_optional_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Actor | None:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return decode_access_token(credentials.credentials)


def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Actor:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError()

    actor = decode_access_token(credentials.credentials)
    if actor is None:
        raise AuthenticationError()
    return actor
