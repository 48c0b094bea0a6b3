"""Auth API routes — register, login, me."""

from fastapi import APIRouter, Depends, status

from gamestore.application.services.auth_service import AuthService
from gamestore.domain.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserProfile,
)
from gamestore.interfaces.api.deps import get_bearer_token, validate_login_credentials
from gamestore.interfaces.deps import get_auth_service

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    return service.register(body.email, body.password)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest = Depends(validate_login_credentials),
    service: AuthService = Depends(get_auth_service),
):
    return service.login(body.email, body.password)


@router.get("/me", response_model=UserProfile)
def get_me(
    token: str = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service),
):
    return service.identify(token)
