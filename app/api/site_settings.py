"""Theme and advertising settings edited from the admin screen."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.auth import require_admin
from app.db.session import get_db
from app.models.site_settings import AdSettings, ThemeSettings
from app.schemas.site_settings import AdSettingsRead, AdSettingsUpdate, ThemeSettingsRead, ThemeSettingsUpdate

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _latest(db: Session, model):
    return db.execute(select(model).order_by(model.updated_at.desc(), model.id.desc()).limit(1)).scalars().first()


@router.get("/theme", response_model=ThemeSettingsRead)
def get_theme(db: Session = Depends(get_db)) -> ThemeSettingsRead:
    row = _latest(db, ThemeSettings)
    if not row:
        raise HTTPException(status_code=404, detail="Theme settings not configured")
    return ThemeSettingsRead.model_validate(row)


@router.put("/theme", response_model=ThemeSettingsRead)
def update_theme(payload: ThemeSettingsUpdate, db: Session = Depends(get_db), _=Depends(require_admin)) -> ThemeSettingsRead:
    row = ThemeSettings(**payload.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return ThemeSettingsRead.model_validate(row)


@router.get("/ads", response_model=AdSettingsRead)
def get_ads(db: Session = Depends(get_db)) -> AdSettingsRead:
    row = _latest(db, AdSettings)
    if not row:
        raise HTTPException(status_code=404, detail="Ad settings not configured")
    return AdSettingsRead.model_validate(row)


@router.put("/ads", response_model=AdSettingsRead)
def update_ads(payload: AdSettingsUpdate, db: Session = Depends(get_db), _=Depends(require_admin)) -> AdSettingsRead:
    row = AdSettings(**payload.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return AdSettingsRead.model_validate(row)
