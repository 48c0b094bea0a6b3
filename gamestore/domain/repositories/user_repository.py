"""
User Repository Interface (Credential Store).
"""

from typing import Optional

from gamestore.domain.models.user import User
from gamestore.domain.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by exact email."""
        ...
