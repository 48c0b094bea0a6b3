"""
Product Repository Interface (Catalog Store).
Defines specific data access operations for products and platforms.
"""

from typing import List, Optional, Sequence, Tuple

from gamestore.domain.models.product import Platform, Product, ProductPlatform
from gamestore.domain.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Interface for catalog-specific operations."""

    def get_platform(self, platform_id: int) -> Optional[Platform]:
        """Get a platform by ID."""
        ...

    def add_platform_link(self, product_id: int, platform_id: int, used: bool) -> ProductPlatform:
        """Stage the association between a product and a platform."""
        ...

    def get_platform_links(self, product_id: int) -> List[Tuple[Platform, bool]]:
        """All (platform, used) pairs of a product, ordered by platform ID."""
        ...

    def seed_platforms(self, names: Sequence[str]) -> int:
        """Insert the given platforms if none exist. Returns how many were added."""
        ...
