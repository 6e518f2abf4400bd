"""
FastAPI application entry point for the Rinde storefront API.

This module initializes the FastAPI app with middleware, CORS, logging,
and registers all API routers.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.core.limiter import limiter
from app.database import init_db, get_db_context
from app.routers import admin, auth, categories, favorites, products, purchases
from app.services.admin_service import admin_service
from app.services.auth_service import auth_service

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def log_session_event(event: str, user) -> None:
    logger.info(f"Session {event}: {user.email if user else 'anonymous'}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info("Initializing database...")
    init_db()
    with get_db_context() as db:
        admin_service.promote_configured_admins(db)
    logger.info("Database initialized successfully")
    unsubscribe = auth_service.subscribe(log_session_event)

    yield

    # Shutdown
    unsubscribe()
    logger.info("Shutting down application...")


# Create FastAPI app
app = FastAPI(
    title="Rinde Storefront API",
    description="Affiliate price comparison, favorites and savings tracking",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def custom_rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": "Rate limit exceeded. Please try again later."},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Operation failed. Please try again."},
    )


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add GZip compression
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Register routers
app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["auth"])
app.include_router(products.router, prefix=f"{settings.API_PREFIX}/products", tags=["products"])
app.include_router(categories.router, prefix=f"{settings.API_PREFIX}/categories", tags=["categories"])
app.include_router(favorites.router, prefix=f"{settings.API_PREFIX}/favorites", tags=["favorites"])
app.include_router(purchases.router, prefix=f"{settings.API_PREFIX}/purchases", tags=["purchases"])
app.include_router(admin.router, prefix=f"{settings.API_PREFIX}/admin", tags=["admin"])

# Uploaded product images
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(settings.MEDIA_URL, StaticFiles(directory=settings.UPLOAD_DIR), name="media")


@app.get("/")
async def root():
    """Root endpoint for health check."""
    return {"message": "Rinde Storefront API", "status": "running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
