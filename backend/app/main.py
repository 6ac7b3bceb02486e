"""
FitTrack API
============
FastAPI application entry point. Mount routers here.

Run locally with ``uvicorn app.main:app --reload`` from ``backend/``.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.db.supabase import get_exercise_store, get_user_store
from app.error_handlers import register_error_handlers
from app.routers import admin, auth, contact, exercise, info
from app.services.seed import run_startup_seed

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_startup_seed(settings, get_exercise_store, get_user_store)
    logger.info("FitTrack API ready (environment=%s)", settings.environment)
    yield


app = FastAPI(
    title="FitTrack API",
    description="Exercise catalog with session-cookie auth",
    version="0.1.0",
    docs_url="/api/docs" if settings.environment != "production" else None,
    redoc_url="/api/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s %s", request.method, request.url.path, response.status_code)
    return response


register_error_handlers(app)

app.include_router(exercise.router, prefix="/api/items")
app.include_router(exercise.router, prefix="/api/exercises", include_in_schema=False)
app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(contact.router)
app.include_router(info.router)


@app.get("/api/v1/health")
async def health_check() -> dict:
    return {"status": "ok", "service": "fittrack-api"}
