"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import get_settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.infrastructure.database import SessionLocal, init_db

# Import routers
from app.interfaces.api.menus import router as menus_router
from app.interfaces.api.restaurants import router as restaurants_router
from app.interfaces.api.users import router as users_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


def ensure_admin_user() -> None:
    """Create the bootstrap admin from ADMIN_* settings if it does not exist yet."""
    if not (settings.ADMIN_EMAIL and settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD):
        return

    from app.domain.models.user import User
    from app.application.services.user_service import UserService
    from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

    db = SessionLocal()
    try:
        service = UserService(SQLAlchemyUserRepository(db, User))
        if service.get_by_email(settings.ADMIN_EMAIL):
            return
        service.add(
            {
                "email": settings.ADMIN_EMAIL,
                "username": settings.ADMIN_USERNAME,
                "password": settings.ADMIN_PASSWORD,
                "roles": ["user", "admin"],
            }
        )
        logger.info("Default admin user created", email=settings.ADMIN_EMAIL)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting FoodExpress API...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only — use migrations in production)
    init_db()
    logger.info("Database tables created/verified")

    ensure_admin_user()

    yield

    logger.info("FoodExpress API stopped")


app = FastAPI(
    title="FoodExpress",
    description="Food-delivery catalog API — users, restaurants and menus",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (CORS, Correlation ID, Logging)
setup_middleware(app)

# Error responses: {"error": status, "message": text}
register_exception_handlers(app)

# Include routers
app.include_router(users_router)
app.include_router(restaurants_router)
app.include_router(menus_router)


@app.get("/")
def root():
    return {
        "name": "FoodExpress",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
