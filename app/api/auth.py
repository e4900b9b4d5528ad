from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth import (
    SessionUser,
    create_session_token,
    get_current_user,
    hash_password,
    verify_password,
)
from app.core.config import settings
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import LoginRequest, PasswordChangeRequest, UserCreate, UserRead

router = APIRouter(prefix="/api/auth", tags=["auth"])
auth_logger = logging.getLogger("app.auth")


def _set_session_cookie(response: Response, user: User) -> None:
    token = create_session_token(user_id=user.id, username=user.username, is_admin=user.is_admin)
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.app_env.lower() == "prod",
        max_age=int(settings.auth_session_hours * 3600),
        path="/",
    )


@router.post("/register", response_model=UserRead, status_code=201)
def register(payload: UserCreate, response: Response, db: Session = Depends(get_db)) -> UserRead:
    username = payload.username.strip()
    email = payload.email.strip().lower()
    clash = db.execute(
        select(User).where(or_(User.username == username, func.lower(User.email) == email))
    ).scalars().first()
    if clash:
        field = "Username" if clash.username == username else "Email"
        raise HTTPException(status_code=400, detail=f"{field} already exists")
    is_first_user = (db.execute(select(func.count(User.id))).scalar() or 0) == 0
    password_hash, password_salt = hash_password(payload.password)
    user = User(
        username=username,
        email=email,
        password_hash=password_hash,
        password_salt=password_salt,
        is_admin=is_first_user,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail="Username or email already exists") from e
    db.refresh(user)
    auth_logger.info("user_registered id=%s username=%s admin=%s", user.id, user.username, user.is_admin)
    _set_session_cookie(response, user)
    return UserRead.model_validate(user)


@router.post("/login", response_model=UserRead)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)) -> UserRead:
    username = payload.username.strip()
    user = db.execute(select(User).where(User.username == username)).scalars().first()
    if not user or not verify_password(payload.password, user.password_hash, user.password_salt):
        auth_logger.info("login_failed username=%s", username)
        raise HTTPException(status_code=401, detail="Invalid username or password")
    _set_session_cookie(response, user)
    return UserRead.model_validate(user)


@router.post("/logout")
def logout(response: Response) -> dict:
    response.delete_cookie(key=settings.auth_cookie_name, path="/")
    return {"ok": True}


@router.get("/me", response_model=UserRead)
def me(current: SessionUser = Depends(get_current_user), db: Session = Depends(get_db)) -> UserRead:
    user = db.get(User, current.user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Authentication required")
    return UserRead.model_validate(user)


@router.post("/change-password")
def change_password(
    payload: PasswordChangeRequest,
    db: Session = Depends(get_db),
    current: SessionUser = Depends(get_current_user),
) -> dict:
    user = db.get(User, current.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    user.password_hash, user.password_salt = hash_password(payload.password)
    db.commit()
    return {"ok": True}
