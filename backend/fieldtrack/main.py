"""
FieldTrack API

FastAPI application for field officer attendance and live distance tracking.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fieldtrack import __version__
from fieldtrack.config import settings
from fieldtrack.db.session import init_db
from fieldtrack.api.v1.router import api_router
from fieldtrack.features.tracking.exceptions import TrackingError


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting FieldTrack API...")
    init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="FieldTrack API",
    description="Field officer attendance and live GPS distance tracking",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Error Handling ===
@app.exception_handler(TrackingError)
async def tracking_error_handler(request: Request, exc: TrackingError):
    """Map tracking domain errors to client errors."""
    logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    content = {"error": exc.message, "type": type(exc).__name__}
    total_km = getattr(exc, "total_km", None)
    if total_km is not None:
        content["total_distance_km"] = total_km
    return JSONResponse(status_code=exc.status_code, content=content)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
