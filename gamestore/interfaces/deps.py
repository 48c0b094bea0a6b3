"""
API Dependencies — repositories and services built from app state.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from gamestore.application.services.auth_service import AuthService
from gamestore.application.services.image_storage import ImageStorage
from gamestore.application.services.product_service import CatalogService
from gamestore.config import Settings
from gamestore.core.security import PasswordHasher, TokenIssuer
from gamestore.domain.models.product import Product
from gamestore.domain.models.user import User
from gamestore.domain.repositories.product_repository import ProductRepository
from gamestore.domain.repositories.user_repository import UserRepository
from gamestore.infrastructure.database import get_db
from gamestore.infrastructure.repositories.product_repository import SQLAlchemyProductRepository
from gamestore.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_image_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Get product repository instance."""
    return SQLAlchemyProductRepository(db, Product)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(users, hasher, tokens)


def get_catalog_service(
    products: ProductRepository = Depends(get_product_repository),
    images: ImageStorage = Depends(get_image_storage),
    settings: Settings = Depends(get_app_settings),
) -> CatalogService:
    return CatalogService(products, images, timezone=settings.TIMEZONE)
