# /reporting-backend/app/main.py

import logging

# --- Core FastAPI Imports ---
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

# --- Configuration & Infrastructure Imports ---
from .core.config import settings
from .core.deps import get_current_principal
from .core.logging_config import configure_logging
from .db import base  # noqa: F401  registers every model on Base.metadata
from .db.base_class import Base
from .db.database import engine
from .services.errors import ScopeResolutionError

# --- Application-specific Router Imports ---
from .routers import (
    classes_router,
    courses_router,
    lecturers_router,
    monitoring_router,
    reports_router,
    students_router,
)

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("Reporting backend started")
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Reporting Backend API",
    description="Lecture reports, ratings and supervisor analytics for academic faculties.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Exception Handlers ---
@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error", extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"detail": "Database error"})


@app.exception_handler(ScopeResolutionError)
async def scope_error_handler(request: Request, exc: ScopeResolutionError):
    logger.error("Scope resolution failed", extra={"path": request.url.path, "reason": str(exc)})
    return JSONResponse(status_code=500, content={"detail": "Database error"})


# --- API Router Inclusion ---
# Every /api route requires a verified bearer token; role gates live on the routes.
authenticated = [Depends(get_current_principal)]

app.include_router(reports_router.router, prefix="/api/reports", tags=["Reports"], dependencies=authenticated)
app.include_router(students_router.router, prefix="/api/students", tags=["Students"], dependencies=authenticated)
app.include_router(lecturers_router.router, prefix="/api/lecturers", tags=["Lecturers"], dependencies=authenticated)
app.include_router(monitoring_router.router, prefix="/api/monitoring", tags=["Monitoring"], dependencies=authenticated)
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"], dependencies=authenticated)
app.include_router(courses_router.router, prefix="/api/courses", tags=["Courses"], dependencies=authenticated)


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Reporting backend is running!", "version": app.version}
