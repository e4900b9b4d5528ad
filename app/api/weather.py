from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.auth import require_admin
from app.db.session import get_db
from app.models.weather import Weather
from app.schemas.weather import WeatherCreate, WeatherRead

router = APIRouter(prefix="/api/weather", tags=["weather"])


def latest_weather(db: Session) -> Weather | None:
    return db.execute(select(Weather).order_by(Weather.date.desc(), Weather.id.desc()).limit(1)).scalars().first()


@router.get("", response_model=WeatherRead)
def get_weather(db: Session = Depends(get_db)) -> WeatherRead:
    row = latest_weather(db)
    if not row:
        raise HTTPException(status_code=404, detail="No weather data available")
    return WeatherRead.model_validate(row)


@router.post("", response_model=WeatherRead, status_code=201)
def update_weather(payload: WeatherCreate, db: Session = Depends(get_db), _=Depends(require_admin)) -> WeatherRead:
    row = Weather(temperature=payload.temperature, condition=payload.condition.strip().lower())
    db.add(row)
    db.commit()
    db.refresh(row)
    return WeatherRead.model_validate(row)
