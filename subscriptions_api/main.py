"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from subscriptions_api.api import auth, protected, publications, recipients, subscriptions
from subscriptions_api.config import get_settings
from subscriptions_api.database import engine, init_db
from subscriptions_api.exceptions import register_exception_handlers

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    # Production schemas are managed by Alembic
    if settings.is_development:
        init_db()
        logger.info("Database tables ensured")
    yield


app = FastAPI(
    title="Subscription Desk API",
    description="Publications, recipients and subscriptions with account management",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(auth.router)
app.include_router(protected.router)
app.include_router(publications.router)
app.include_router(recipients.router)
app.include_router(subscriptions.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check could not reach the database")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "disconnected"},
        )
    return {"status": "healthy", "database": "connected", "environment": settings.environment}
