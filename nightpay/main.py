# nightpay/main.py
"""
FastAPI application entry point.
"""

import asyncio
import contextlib
import os
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from nightpay.core.config import IS_PRODUCTION
from nightpay.core.constants import DEFAULT_TICK_INTERVAL_SECONDS
from nightpay.core.engine import EarningsEngine
from nightpay.core.logging_config import get_logger, setup_logging
from nightpay.core.request_logging import RequestLoggingMiddleware
from nightpay.core.sentry_config import init_sentry
from nightpay.core.storage import EarningsRepository, load_compensation_config
from nightpay.core.ticker import run_ticker
from nightpay.database.database import SessionLocal, create_tables, get_db
from nightpay.routes.dashboard import router as dashboard_router
from nightpay.routes.earnings_api import router as earnings_api_router

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)

# Initialize Sentry for error tracking (production only)
sentry_enabled = init_sentry()

APP_VERSION = "0.1.0"


def get_tick_interval() -> float:
    """Tick interval from TICK_INTERVAL_SECONDS, falling back to the default on bad values."""
    raw = os.getenv("TICK_INTERVAL_SECONDS", "")
    if not raw:
        return DEFAULT_TICK_INTERVAL_SECONDS
    try:
        interval = float(raw)
    except ValueError:
        logger.warning(f"Invalid TICK_INTERVAL_SECONDS={raw!r}, using {DEFAULT_TICK_INTERVAL_SECONDS}")
        return DEFAULT_TICK_INTERVAL_SECONDS
    return interval if interval > 0 else DEFAULT_TICK_INTERVAL_SECONDS


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Application starting up",
        extra={
            "extra_fields": {
                "production": IS_PRODUCTION,
                "python_version": sys.version,
            }
        },
    )

    # Compensation config must be valid before anything is computed
    try:
        compensation = load_compensation_config()
    except Exception as e:
        logger.error(f"Compensation config could not be loaded: {e}", exc_info=True)
        raise

    # Create database tables
    try:
        create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}", exc_info=True)
        raise

    engine = EarningsEngine(compensation, EarningsRepository(SessionLocal))
    app.state.engine = engine
    ticker = asyncio.create_task(run_ticker(engine, get_tick_interval()))

    yield

    # Shutdown
    ticker.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await ticker
    engine.on_session_end()
    logger.info("Application shutting down")


app = FastAPI(
    title="Nightpay",
    description="Live night-shift earnings and semi-monthly payroll projection",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS Configuration
CORS_ORIGINS = (
    [origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()]
    if os.getenv("CORS_ORIGINS")
    else []
)

if IS_PRODUCTION:
    # Production: Strict CORS - only allow specified origins
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests. "
            "Set CORS_ORIGINS environment variable if you need to allow specific origins."
        )

    allowed_origins = CORS_ORIGINS
    allow_credentials = True
    allowed_methods = ["GET", "POST", "PUT", "DELETE"]  # Only allow methods we use
    allowed_headers = ["*"]

    logger.info(f"CORS configured for production with origins: {allowed_origins}")
else:
    # Development: Permissive CORS for easier testing
    allowed_origins = ["*"]
    allow_credentials = True
    allowed_methods = ["*"]
    allowed_headers = ["*"]

    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=allowed_methods,
    allow_headers=allowed_headers,
    expose_headers=["X-Request-ID"],  # Expose our request ID header
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(dashboard_router)
app.include_router(earnings_api_router)


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns 200 OK if the application and the record store are reachable,
    503 Service Unavailable if the database connection fails.
    """
    try:
        db.execute(text("SELECT 1"))
        return JSONResponse(
            status_code=200,
            content={
                "status": "healthy",
                "service": "nightpay",
                "version": APP_VERSION,
                "database": "connected",
            },
        )
    except Exception as e:
        logger.error(f"Health check failed - database connection error: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "service": "nightpay",
                "database": "disconnected",
                "error": "Database connection failed",
            },
        ) from e
