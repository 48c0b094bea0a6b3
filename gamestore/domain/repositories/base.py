"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from contextlib import AbstractContextManager
from typing import Any, List, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for the storage operations every repository offers."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def list(self) -> List[T]:
        """List all entities ordered by ID."""
        ...

    def add(self, obj_in: Any) -> T:
        """Stage a new entity; it is written when the surrounding transaction commits."""
        ...

    def atomic(self) -> AbstractContextManager:
        """Transaction scope: commit on success, roll back on any error."""
        ...
