"""FastAPI dependencies — bearer token auth and credential pre-checks."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gamestore.application.services.auth_service import ensure_credentials
from gamestore.core.exceptions import UnauthorizedException
from gamestore.core.security import TokenIssuer
from gamestore.domain.schemas.auth import LoginRequest, TokenClaims
from gamestore.interfaces.deps import get_token_issuer

# auto_error=False so a missing header yields our 401 instead of FastAPI's default
security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Raw token from `Authorization: Bearer <token>`."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Token no proporcionado")
    return credentials.credentials


def get_token_claims(
    token: str = Depends(get_bearer_token),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    """Validate signature and expiry of the bearer token."""
    return tokens.verify(token)


def validate_login_credentials(body: LoginRequest) -> LoginRequest:
    """Reject a login without both email and password before touching the store."""
    ensure_credentials(body.email, body.password)
    return body
