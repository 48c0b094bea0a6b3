"""Catalog service — product listing, detail and creation."""

from datetime import date, datetime
from typing import List, Optional

import pytz
import structlog

from gamestore.application.services.image_storage import ImageStorage, StoredImage
from gamestore.core.exceptions import BadRequestException, EntityNotFoundException
from gamestore.domain.models.product import Product
from gamestore.domain.repositories.product_repository import ProductRepository
from gamestore.domain.schemas.product import (
    DESCRIPTION_PLACEHOLDER,
    PlatformAssociation,
    ProductCreate,
    ProductDetail,
    ProductSummary,
)
from gamestore.infrastructure.database import handle_store_errors

logger = structlog.get_logger(__name__)

MISSING_FIELDS_MESSAGE = "Faltan campos obligatorios: nombre_juego, precio, id_plataforma"
PRODUCT_NOT_FOUND_MESSAGE = "Producto no encontrado"


def to_summary(product: Product) -> ProductSummary:
    return ProductSummary(
        id=product.id,
        name=product.name,
        description=product.description,
        price=float(product.price),
        release_date=product.release_date,
        imageurl=product.image_url,
    )


class CatalogService:
    """Composes the catalog store and image intake."""

    def __init__(self, products: ProductRepository, images: ImageStorage, timezone: str = "UTC"):
        self.products = products
        self.images = images
        self.tz = pytz.timezone(timezone)

    def get_current_date(self) -> date:
        """Current date in the configured timezone."""
        return datetime.now(self.tz).date()

    def list_products(self) -> List[ProductSummary]:
        with handle_store_errors("Error al obtener productos"):
            products = self.products.list()
        return [to_summary(p) for p in products]

    def get_product(self, product_id: int) -> ProductDetail:
        with handle_store_errors("Error al obtener producto"):
            product = self.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundException(PRODUCT_NOT_FOUND_MESSAGE)
            links = self.products.get_platform_links(product.id)

        fields = to_summary(product).model_dump()
        fields["description"] = product.description or DESCRIPTION_PLACEHOLDER
        return ProductDetail(
            **fields,
            videourl=product.video_url or None,
            platforms=[
                PlatformAssociation(id=platform.id, name=platform.name, used=used)
                for platform, used in links
            ],
        )

    def create_product(
        self,
        data: ProductCreate,
        image_content: Optional[bytes] = None,
        image_name: Optional[str] = None,
    ) -> ProductSummary:
        """
        Create a product and its platform associations in one transaction.

        The image, if any, is written first; it is removed again when the
        database writes fail so no orphan file is left behind.
        """
        if not data.name or data.price is None or not data.platform_ids:
            raise BadRequestException(MISSING_FIELDS_MESSAGE)

        platform_ids = list(dict.fromkeys(data.platform_ids))

        with handle_store_errors("Error al crear producto"):
            unknown = [pid for pid in platform_ids if self.products.get_platform(pid) is None]
            if unknown:
                raise BadRequestException("Plataforma no encontrada", details={"id_plataforma": unknown})

            image: Optional[StoredImage] = None
            if image_content is not None:
                image = self.images.store(image_content, image_name)

            try:
                with self.products.atomic():
                    product = self.products.add({
                        "name": data.name,
                        "description": data.description,
                        "price": data.price,
                        "image_url": image.url if image else None,
                        "release_date": self.get_current_date(),
                    })
                    for platform_id in platform_ids:
                        self.products.add_platform_link(product.id, platform_id, data.used)
            except Exception:
                if image is not None:
                    self.images.discard(image)
                raise

        logger.info(
            "Product created",
            product_id=product.id,
            platform_ids=platform_ids,
            used=data.used,
            has_image=image is not None,
        )
        return to_summary(product)
