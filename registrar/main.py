"""FastAPI Heartbeat. Lean."""

from __future__ import annotations

import logging
import os
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from registrar.core.config import get_settings
from registrar.common.errors import register_exception_handlers
from registrar.db.base import list_models
from registrar.db.session import engine
from registrar.features.courses.endpoints import router as courses_router
from registrar.features.enrolled_courses.endpoints import router as marks_router
from registrar.features.offered_courses.endpoints import (
    router as offered_courses_router,
    schedules_router as class_schedules_router,
    sections_router as offered_sections_router,
)
from registrar.features.payments.endpoints import router as payments_router
from registrar.features.semester_registration.endpoints import router as semester_registration_router

_settings = get_settings()
logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title=_settings.app_name, debug=_settings.debug)
_START_TIME = datetime.now(timezone.utc)


# ------------------------
# CORS Setup
# ------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------
# Custom Middlewares
# ------------------------
@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    incoming = request.headers.get("X-Request-Id") or request.headers.get("X-Request-ID")
    req_id = incoming or str(uuid.uuid4())
    request.state.request_id = req_id
    logger = logging.getLogger("request")
    logger.info("request.start request_id=%s method=%s path=%s", req_id, request.method, request.url.path)
    response = await call_next(request)
    response.headers["X-Request-Id"] = req_id
    logger.info("request.end request_id=%s path=%s status_code=%s", req_id, request.url.path, response.status_code)
    return response


@app.middleware("http")
async def timing_middleware(request: Request, call_next):
    t0 = time.perf_counter()
    resp = await call_next(request)
    dt = int((time.perf_counter() - t0) * 1000)
    logging.getLogger("timing").debug("%s %s %dms %s", request.method, request.url.path, dt, resp.status_code)
    return resp


register_exception_handlers(app)


# ------------------------
# Routers
# ------------------------
app.include_router(semester_registration_router)
app.include_router(courses_router)
app.include_router(offered_courses_router)
app.include_router(offered_sections_router)
app.include_router(class_schedules_router)
app.include_router(marks_router)
app.include_router(payments_router)


# ------------------------
# Meta endpoints
# ------------------------
@app.get("/", tags=["meta"], summary="API Root")
async def root():
    return {
        "name": _settings.app_name,
        "status": "ok",
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/healthz",
    }


@app.get("/healthz", tags=["meta"], summary="Liveness / readiness probe")
def healthz() -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    uptime_seconds = (now - _START_TIME).total_seconds()
    db_status: str = "unknown"
    db_latency_ms: float | None = None

    try:
        start = time.perf_counter()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_latency_ms = round((time.perf_counter() - start) * 1000, 2)
        db_status = "ok"
    except SQLAlchemyError as e:
        logging.getLogger("healthz").warning("db_check_failed error=%s", type(e).__name__)
        db_status = f"error:{type(e).__name__}"

    return {
        "status": "ok" if db_status == "ok" else "degraded",
        "time_utc": now.isoformat(),
        "uptime_seconds": round(uptime_seconds, 2),
        "version": os.getenv("APP_VERSION", "dev"),
        "environment": "debug" if _settings.debug else "prod",
        "components": {
            "database": (
                {"status": db_status, "latency_ms": db_latency_ms}
                if db_status == "ok"
                else {"status": db_status}
            ),
        },
        "counts": {"routes": len(app.routes), "models": len(list_models())},
    }
