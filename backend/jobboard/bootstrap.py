from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

from jobboard.auth import hash_password
from jobboard.config import settings
from jobboard.models.enums import Role


logger = logging.getLogger(__name__)


def ensure_default_admin(engine: Engine) -> None:
    """Create or promote the platform admin named by DEFAULT_ADMIN_EMAIL."""
    admin_email = settings.default_admin_email.strip().lower()
    admin_password = settings.default_admin_password
    if not admin_email or not admin_password:
        return

    with engine.begin() as conn:
        admin_row = conn.execute(
            text("SELECT id FROM users WHERE email = :email"),
            {"email": admin_email},
        ).fetchone()
        if admin_row:
            conn.execute(
                text("UPDATE users SET role = :role, password_hash = :password_hash WHERE id = :id"),
                {"role": Role.ADMIN.value, "password_hash": hash_password(admin_password), "id": int(admin_row[0])},
            )
            logger.info("Default admin %s refreshed", admin_email)
            return

        conn.execute(
            text(
                "INSERT INTO users (name, email, password_hash, role) "
                "VALUES (:name, :email, :password_hash, :role)"
            ),
            {
                "name": "Platform Admin",
                "email": admin_email,
                "password_hash": hash_password(admin_password),
                "role": Role.ADMIN.value,
            },
        )
        logger.info("Default admin %s created", admin_email)
