from contextlib import asynccontextmanager
import logging
import time
import uuid

from fastapi import FastAPI
from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.auth import router as auth_router
from app.api.dashboard import router as dashboard_router
from app.api.news import router as news_router
from app.api.notifications import router as notifications_router
from app.api.site_settings import router as site_settings_router
from app.api.weather import router as weather_router
from app.core.auth import parse_session_token
from app.core.config import settings
from app.db.base import Base
from app.db.migrations import apply_column_migrations
from app.db.seed import seed_admin_user_if_missing
from app.db.session import engine, SessionLocal
import app.models  # noqa: F401 - register models with Base.metadata

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s %(message)s",
)
request_logger = logging.getLogger("app.request")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables, patch older schemas, ensure an admin exists
    Base.metadata.create_all(bind=engine)
    apply_column_migrations(engine)
    db = SessionLocal()
    try:
        seed_admin_user_if_missing(db)
    finally:
        db.close()
    yield


app = FastAPI(
    title="Local News Portal API",
    description="News articles, notifications with unread tracking, and the weather snapshot",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.app_cors_origins.split(",") if settings.app_cors_origins else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

PROTECTED_API_PREFIXES = (
    "/api/dashboard",
    "/api/notifications",
    "/api/auth/me",
    "/api/auth/change-password",
)


@app.middleware("http")
async def request_logging_middleware(request, call_next):
    req_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        request_logger.exception(
            "request_failed id=%s method=%s path=%s ms=%s",
            req_id,
            request.method,
            request.url.path,
            elapsed_ms,
        )
        raise
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    response.headers["x-request-id"] = req_id
    request_logger.info(
        "request_done id=%s method=%s path=%s status=%s ms=%s",
        req_id,
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    token = request.cookies.get(settings.auth_cookie_name)
    user = parse_session_token(token)
    request.state.user = user

    if request.url.path.startswith(PROTECTED_API_PREFIXES) and not user:
        return JSONResponse(status_code=401, content={"detail": "Authentication required"})
    return await call_next(request)


app.include_router(auth_router)
app.include_router(dashboard_router)
app.include_router(news_router)
app.include_router(notifications_router)
app.include_router(site_settings_router)
app.include_router(weather_router)


@app.get("/api/health", include_in_schema=False)
def health() -> dict:
    return {"ok": True}
