"""FastAPI application — main entry point."""

import os
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from gamestore.application.services.image_storage import ImageStorage
from gamestore.config import Settings, get_settings
from gamestore.core.exceptions import (
    AppError,
    app_error_handler,
    global_exception_handler,
    validation_exception_handler,
)
from gamestore.core.logging import configure_logging
from gamestore.core.middleware import setup_middleware
from gamestore.core.security import PasswordHasher, TokenIssuer
from gamestore.infrastructure.database import Base, build_engine, build_session_factory

# Import all models so SQLAlchemy knows about them
from gamestore.domain.models.product import Platform, Product, ProductPlatform  # noqa: F401
from gamestore.domain.models.user import User  # noqa: F401

from gamestore.interfaces.api.auth import router as auth_router
from gamestore.interfaces.api.products import router as products_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    settings: Settings = app.state.settings
    logger.info("Starting Game Store API", env=settings.ENVIRONMENT)

    # Create DB tables (dev convenience; production schema is managed separately)
    Base.metadata.create_all(bind=app.state.engine)
    logger.info("Database tables created/verified")

    from gamestore.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
    db = app.state.session_factory()
    try:
        added = SQLAlchemyProductRepository(db, Product).seed_platforms(settings.SEED_PLATFORMS)
        if added:
            logger.info("Default platforms created", count=added)
    finally:
        db.close()

    yield

    app.state.engine.dispose()
    logger.info("Game Store API stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one explicit configuration object."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Game Store API",
        description="Backend de la tienda de videojuegos — usuarios, catálogo e imágenes",
        version="1.0.0",
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.token_issuer = TokenIssuer(
        settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        lifetime=timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    )
    app.state.image_storage = ImageStorage(settings.UPLOAD_DIR, settings.UPLOAD_URL_PREFIX)

    # Setup Middleware (Correlation ID, Logging)
    setup_middleware(app)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # CORS is added last so it is the outermost middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(products_router)

    # Uploaded images
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=settings.UPLOAD_DIR),
        name="uploads",
    )

    @app.get("/")
    def root():
        return {
            "name": "Game Store API",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST:PORT."""
    settings = get_settings()
    uvicorn.run(
        "gamestore.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
    )


if __name__ == "__main__":
    run()
