"""
Main FastAPI application
"""
import json
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from travelhub.config.database import db_config
from travelhub.config.settings import settings, configure_logging
from travelhub.routes import (
    users,
    customers,
    agencies,
    packages,
    reservations,
    agency_reservations,
)
from travelhub.services.errors import BookingError

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events"""
    # Startup
    await db_config.connect_db()
    await db_config.ensure_indexes()
    logger.info("%s v%s started", settings.APP_NAME, settings.VERSION)
    yield
    # Shutdown
    await db_config.close_db()
    logger.info("Application shutdown")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    logger.info("%s on %s %s: %s", exc.code, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Round-trip through json with default=str to handle non-serializable objects (e.g. ValueError)
    safe_errors = json.loads(json.dumps(exc.errors(), default=str))
    logger.warning("422 validation error on %s %s: %s", request.method, request.url.path, safe_errors)
    return JSONResponse(status_code=422, content={"detail": safe_errors})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info("%s %s - %s (%.2fs)", request.method, request.url.path, response.status_code, duration)
    return response


# Include routers
app.include_router(users.router, prefix="/api")
app.include_router(customers.router, prefix="/api")
app.include_router(agencies.router, prefix="/api")
app.include_router(packages.router, prefix="/api")
app.include_router(reservations.router, prefix="/api")
app.include_router(agency_reservations.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Liveness plus whether the MongoDB handle is open"""
    return {
        "status": "healthy",
        "database": "connected" if db_config.database is not None else "disconnected",
    }
