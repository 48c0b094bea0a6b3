"""Auth service — registration, login and identity lookup."""

from typing import Optional

import structlog
from email_validator import EmailNotValidError, validate_email
from passlib.exc import PasswordSizeError
from sqlalchemy.exc import IntegrityError

from gamestore.core.exceptions import (
    BadRequestException,
    ConflictException,
    EntityNotFoundException,
    UnauthorizedException,
)
from gamestore.core.security import PasswordHasher, TokenIssuer
from gamestore.domain.repositories.user_repository import UserRepository
from gamestore.domain.schemas.auth import RegisterResponse, TokenResponse, UserProfile
from gamestore.infrastructure.database import handle_store_errors

logger = structlog.get_logger(__name__)

REGISTERED_MESSAGE = "Usuario registrado con éxito"
USER_EXISTS_MESSAGE = "El usuario ya existe"
USER_NOT_FOUND_MESSAGE = "Usuario no encontrado"
WRONG_PASSWORD_MESSAGE = "Contraseña incorrecta"
CREDENTIALS_REQUIRED_MESSAGE = "Se requiere email y password"
NO_RECENT_POSTS = "Sin publicaciones recientes"


def default_display_name(email: str) -> str:
    """Local part of the email, used until the user picks a name."""
    return email.split("@", 1)[0]


def ensure_credentials(email: Optional[str], password: Optional[str]) -> None:
    if not email or not password:
        raise BadRequestException(CREDENTIALS_REQUIRED_MESSAGE)


class AuthService:
    """Composes the credential store, password hasher and token issuer."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenIssuer):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def register(self, email: Optional[str], password: Optional[str]) -> RegisterResponse:
        ensure_credentials(email, password)
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            raise BadRequestException("Email inválido", details={"reason": str(e)})

        try:
            password_hash = self.hasher.hash(password)
        except PasswordSizeError:
            raise BadRequestException("La contraseña es demasiado larga")

        with handle_store_errors("Error al registrar el usuario"):
            if self.users.get_by_email(email) is not None:
                raise ConflictException(USER_EXISTS_MESSAGE)

            try:
                with self.users.atomic():
                    user = self.users.add({"email": email, "password_hash": password_hash})
            except IntegrityError:
                # Lost a race with a concurrent registration of the same email
                raise ConflictException(USER_EXISTS_MESSAGE)

        logger.info("User registered", user_id=user.id)
        return RegisterResponse(
            message=REGISTERED_MESSAGE,
            token=self.tokens.issue(user.id, email=user.email),
        )

    def login(self, email: str, password: str) -> TokenResponse:
        with handle_store_errors("Error al iniciar sesión"):
            user = self.users.get_by_email(email)

        if user is None:
            logger.info("Login failed", reason="unknown_email")
            raise UnauthorizedException(USER_NOT_FOUND_MESSAGE)
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed", reason="wrong_password", user_id=user.id)
            raise UnauthorizedException(WRONG_PASSWORD_MESSAGE)

        logger.info("User logged in", user_id=user.id)
        return TokenResponse(token=self.tokens.issue(user.id, email=user.email))

    def identify(self, token: str) -> UserProfile:
        claims = self.tokens.verify(token)

        with handle_store_errors("Error al obtener datos del usuario"):
            user = self.users.get_by_id(claims.user_id)

        if user is None:
            raise EntityNotFoundException(USER_NOT_FOUND_MESSAGE)

        return UserProfile(
            email=user.email,
            name=user.name or default_display_name(user.email),
            last_post=user.last_post or NO_RECENT_POSTS,
            avatar_url=user.avatar_url or None,
        )
