from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.auth import SessionUser, get_current_user, require_admin
from app.db.session import get_db
from app.models.notification import Notification
from app.schemas.notification import NotificationCreate, NotificationRead, UnreadStatus
from app.services.notification_service import list_notifications, tracker_for_user, unread_status

router = APIRouter(prefix="/api/notifications", tags=["notifications"])
logger = logging.getLogger("app.notifications")


@router.get("", response_model=list[NotificationRead])
def get_notifications(
    db: Session = Depends(get_db),
    current: SessionUser = Depends(get_current_user),
    include_expired: bool = Query(False, alias="includeExpired"),
) -> list[NotificationRead]:
    if include_expired and not current.is_admin:
        raise HTTPException(status_code=403, detail="Only admins can list expired notifications")
    rows = list_notifications(db, include_expired=include_expired)
    return [NotificationRead.model_validate(r) for r in rows]


@router.post("", response_model=NotificationRead, status_code=201)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    admin: SessionUser = Depends(require_admin),
) -> NotificationRead:
    row = Notification(
        title=payload.title.strip(),
        message=payload.message,
        expiration_hours=payload.expiration_hours,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("notification_created id=%s by=%s expiration_hours=%s", row.id, admin.username, row.expiration_hours)
    return NotificationRead.model_validate(row)


@router.get("/unread", response_model=UnreadStatus)
def get_unread(db: Session = Depends(get_db), current: SessionUser = Depends(get_current_user)) -> UnreadStatus:
    return unread_status(tracker_for_user(db, current.user_id))


@router.post("/mark-all-read", response_model=UnreadStatus)
def mark_all_notifications_read(
    db: Session = Depends(get_db), current: SessionUser = Depends(get_current_user)
) -> UnreadStatus:
    tracker = tracker_for_user(db, current.user_id)
    tracker.on_open()
    return unread_status(tracker)


@router.post("/{notification_id}/read", response_model=UnreadStatus)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current: SessionUser = Depends(get_current_user),
) -> UnreadStatus:
    if not db.get(Notification, notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    tracker = tracker_for_user(db, current.user_id)
    tracker.on_item_click(notification_id)
    return unread_status(tracker)
