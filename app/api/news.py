from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.auth import SessionUser, require_admin
from app.db.session import get_db
from app.models.news import News
from app.schemas.news import NewsCreate, NewsRead

router = APIRouter(prefix="/api/news", tags=["news"])
logger = logging.getLogger("app.news")


def latest_news(db: Session, limit: int | None = None) -> list[News]:
    q = select(News).order_by(News.created_at.desc(), News.id.desc())
    if limit:
        q = q.limit(limit)
    return list(db.execute(q).scalars().all())


@router.get("", response_model=list[NewsRead])
def list_news(
    db: Session = Depends(get_db),
    limit: int | None = Query(None, ge=1, le=500),
) -> list[NewsRead]:
    return [NewsRead.model_validate(r) for r in latest_news(db, limit)]


@router.get("/{news_id}", response_model=NewsRead)
def get_news(news_id: int, db: Session = Depends(get_db)) -> NewsRead:
    row = db.get(News, news_id)
    if not row:
        raise HTTPException(status_code=404, detail="News not found")
    return NewsRead.model_validate(row)


@router.post("", response_model=NewsRead, status_code=201)
def create_news(
    payload: NewsCreate,
    db: Session = Depends(get_db),
    admin: SessionUser = Depends(require_admin),
) -> NewsRead:
    image_url = (payload.image_url or "").strip() or None
    row = News(title=payload.title.strip(), content=payload.content, image_url=image_url, author_id=admin.user_id)
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("news_created id=%s by=%s", row.id, admin.username)
    return NewsRead.model_validate(row)


@router.delete("/{news_id}", status_code=204)
def delete_news(news_id: int, db: Session = Depends(get_db), admin: SessionUser = Depends(require_admin)) -> None:
    row = db.get(News, news_id)
    if not row:
        raise HTTPException(status_code=404, detail="News not found")
    db.delete(row)
    db.commit()
    logger.info("news_deleted id=%s by=%s", news_id, admin.username)
