"""Products API routes — list, detail, create with image upload."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from gamestore.application.services.product_service import CatalogService
from gamestore.core.exceptions import BadRequestException
from gamestore.domain.schemas.auth import TokenClaims
from gamestore.domain.schemas.product import ProductCreate, ProductDetail, ProductSummary
from gamestore.interfaces.api.deps import get_token_claims
from gamestore.interfaces.deps import get_catalog_service

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=List[ProductSummary])
def list_products(service: CatalogService = Depends(get_catalog_service)):
    return service.list_products()


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(product_id: int, service: CatalogService = Depends(get_catalog_service)):
    return service.get_product(product_id)


@router.post("", response_model=ProductSummary, status_code=status.HTTP_201_CREATED)
async def create_product(
    nombre_juego: Optional[str] = Form(None),
    descripcion: Optional[str] = Form(None),
    precio: Optional[str] = Form(None),
    id_plataforma: Optional[List[str]] = Form(None),
    usado: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: CatalogService = Depends(get_catalog_service),
    claims: TokenClaims = Depends(get_token_claims),
):
    try:
        data = ProductCreate(
            name=nombre_juego,
            description=descripcion,
            price=precio,
            platform_ids=[pid for pid in id_plataforma or [] if pid.strip()],
            used=usado,
        )
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise BadRequestException("Datos de producto inválidos", details={"fields": fields})

    image_content = None
    image_name = None
    if image is not None and image.filename:
        image_content = await image.read()
        image_name = image.filename

    # Store and file I/O are blocking; keep them off the event loop
    return await run_in_threadpool(
        service.create_product, data, image_content, image_name
    )
