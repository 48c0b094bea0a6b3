"""Pydantic schemas for User and Auth."""

from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterResponse(BaseModel):
    message: str
    token: str


class TokenResponse(BaseModel):
    token: str


class UserProfile(BaseModel):
    """Public projection of a user returned by /api/me."""
    email: str
    name: str
    last_post: str = Field(alias="lastPost")
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")

    model_config = {"populate_by_name": True}


class TokenClaims(BaseModel):
    """Claims carried by a session token. `email` is optional."""
    sub: int
    email: Optional[str] = None
    iat: int
    exp: int

    @property
    def user_id(self) -> int:
        return self.sub
