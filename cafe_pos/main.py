"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from cafe_pos.api.routes import api_router
from cafe_pos.core.config import settings
from cafe_pos.core.exceptions import PosError
from cafe_pos.core.observability import RequestLoggingMiddleware, configure_logging, get_correlation_id
from cafe_pos.core.rate_limit import limiter
from cafe_pos.db.base import Base
from cafe_pos.db.session import engine

import cafe_pos.models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


def _ensure_sqlite_dir(database_url: str) -> None:
    if not database_url.startswith("sqlite:///") or ":memory:" in database_url:
        return
    directory = os.path.dirname(database_url[len("sqlite:///"):])
    if directory:
        os.makedirs(directory, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging(settings.log_level)
    logger.info("Starting Cafe POS backend")

    # SQLite is the only supported store; tables are created in place
    _ensure_sqlite_dir(settings.database_url)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")

    yield

    logger.info("Shutting down Cafe POS backend")


app = FastAPI(
    title="Cafe POS",
    description="Inventory, sales and attendance backend for a single-store cafe",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# Rate limiting setup
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(PosError)
async def pos_error_handler(request: Request, exc: PosError):
    logger.info(
        f"[{get_correlation_id()}] {request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware - added last so it runs first (Starlette LIFO order)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin", "X-Correlation-ID"],
    expose_headers=["X-Correlation-ID"],
    max_age=600,
)

# Include API routes
app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.get("/health")
def health_check():
    """Basic liveness check endpoint."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("cafe_pos.main:app", host="0.0.0.0", port=8000, log_level=settings.log_level.lower())
