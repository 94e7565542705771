"""FastAPI application entry point."""

import logging
import platform
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api import admin, auth, inquiries, products, users
from storefront.api.error_handlers import setup_exception_handlers
from storefront.config import get_settings
from storefront.database import get_db, ping
from storefront.services.sessions import build_session_store

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Storefront API"
VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    app.state.session_store = build_session_store(settings)
    logger.info(f"{SERVICE_NAME} starting (environment={settings.environment})")
    yield
    logger.info(f"{SERVICE_NAME} shutting down")


app = FastAPI(
    title=SERVICE_NAME,
    description="Product catalog, customer accounts and inquiry management",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Content-Range", "X-Content-Range"],
)

setup_exception_handlers(app)

# Register routers
app.include_router(auth.router)
app.include_router(products.router)
app.include_router(inquiries.router)
app.include_router(users.router)
app.include_router(admin.router)


@app.get("/api/health")
def health_check(db: Annotated[Session, Depends(get_db)]):
    """Health check endpoint, including a database round-trip."""
    timestamp = datetime.now(UTC).isoformat()
    try:
        ping(db)
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "status": "unhealthy",
                "timestamp": timestamp,
                "error": "Database connection failed",
            },
        )
    return {
        "status": "healthy",
        "timestamp": timestamp,
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "database": "connected",
    }


@app.get("/api/info")
async def info():
    """Static service information."""
    return {
        "name": SERVICE_NAME,
        "version": VERSION,
        "description": "E-commerce and inquiry management system",
        "environment": settings.environment,
        "python_version": platform.python_version(),
    }
