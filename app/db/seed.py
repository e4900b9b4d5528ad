"""
Seed the default admin account so a fresh deployment can log in.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from app.core.auth import hash_password
from app.core.config import settings
from app.models.user import User

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def seed_admin_user_if_missing(
    session: "Session",
    *,
    username: str | None = None,
    email: str | None = None,
    password: str | None = None,
) -> int:
    """
    Ensure the admin user exists and has admin rights. Returns 1 when a user was created.
    """
    from sqlalchemy import func, select

    username = (username or settings.admin_username).strip()
    existing = (
        session.execute(select(User).where(func.lower(User.username) == username.lower()))
        .scalars()
        .first()
    )
    if existing:
        if not existing.is_admin:
            existing.is_admin = True
            session.commit()
        return 0
    password_hash, password_salt = hash_password(password or settings.admin_password)
    session.add(
        User(
            username=username,
            email=(email or settings.admin_email).strip().lower(),
            password_hash=password_hash,
            password_salt=password_salt,
            is_admin=True,
        )
    )
    session.commit()
    return 1
