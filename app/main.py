# /app/main.py

import functools
import logging

# --- Core FastAPI Imports ---
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

# --- Application-specific Imports ---
from .core.audit_middleware import AuditTrailMiddleware
from .core.config import settings
from .core.errors import ApiError, Unauthenticated
from .db import base  # noqa: F401  (registers every model on Base.metadata)
from .db.base_class import Base
from .db.database import SessionLocal, engine
from .routers import (
    attendance_router,
    audit_logs_router,
    auth_router,
    classes_router,
    dashboard_router,
    grades_router,
    health_router,
    parents_router,
    payments_router,
    schedules_router,
    schools_router,
    students_router,
    subjects_router,
    teachers_router,
    users_router,
)

# --- Service Imports for Startup Logic ---
from .services import audit_service, user_service
from .services.database_service import DatabaseService

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at startup. Production schemas come from Alembic; create_all
    # only fills in missing tables for local SQLite databases.
    if settings.database_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        user_service.ensure_bootstrap_admin(DatabaseService(session), settings)
    logger.info("School records API started")
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="School Records API",
    description="Multi-tenant school records backend with role and ownership based access control.",
    version="1.0.0",
    lifespan=lifespan,
)

# The audit middleware looks this up per request.
app.state.audit_recorder = audit_service.AuditRecorder(
    sink=functools.partial(audit_service.persist_entry, SessionLocal)
)

# --- Middleware Configuration ---
app.add_middleware(AuditTrailMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Exception Handlers ---
@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# --- API Router Inclusion ---
app.include_router(health_router.router, prefix="/api/health", tags=["Health Check"])
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(users_router.router, prefix="/api/users", tags=["Users"])
app.include_router(schools_router.router, prefix="/api/schools", tags=["Schools"])
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(subjects_router.router, prefix="/api/subjects", tags=["Subjects"])
app.include_router(schedules_router.router, prefix="/api/schedules", tags=["Schedules"])
app.include_router(teachers_router.router, prefix="/api/teachers", tags=["Teachers"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(parents_router.router, prefix="/api/parents", tags=["Parents"])
app.include_router(grades_router.router, prefix="/api/grades", tags=["Grades"])
app.include_router(attendance_router.router, prefix="/api/attendance", tags=["Attendance"])
app.include_router(payments_router.router, prefix="/api/payments", tags=["Payments"])
app.include_router(audit_logs_router.router, prefix="/api/audit-logs", tags=["Audit Logs"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(dashboard_router.notifications_router, prefix="/api/notifications", tags=["Dashboard"])


# --- Root Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple check to confirm the API is online."""
    return {"status": "School Records API is running!", "version": app.version}
