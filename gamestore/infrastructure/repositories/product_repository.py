"""
SQLAlchemy Implementation of Product Repository.
"""

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func

from gamestore.domain.models.product import Platform, Product, ProductPlatform
from gamestore.domain.repositories.product_repository import ProductRepository
from gamestore.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product], ProductRepository):
    """Catalog repository implementation using SQLAlchemy."""

    def get_platform(self, platform_id: int) -> Optional[Platform]:
        return self.db.get(Platform, platform_id)

    def add_platform_link(self, product_id: int, platform_id: int, used: bool) -> ProductPlatform:
        link = ProductPlatform(product_id=product_id, platform_id=platform_id, used=used)
        self.db.add(link)
        self.db.flush()
        return link

    def get_platform_links(self, product_id: int) -> List[Tuple[Platform, bool]]:
        rows = (
            self.db.query(Platform, ProductPlatform.used)
            .join(ProductPlatform, ProductPlatform.platform_id == Platform.id)
            .filter(ProductPlatform.product_id == product_id)
            .order_by(Platform.id)
            .all()
        )
        return [(platform, bool(used)) for platform, used in rows]

    def seed_platforms(self, names: Sequence[str]) -> int:
        existing = self.db.query(func.count(Platform.id)).scalar() or 0
        if existing:
            return 0
        with self.atomic():
            self.db.add_all([Platform(name=name) for name in names])
        return len(names)
