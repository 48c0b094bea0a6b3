"""Pydantic schemas for the catalog."""

from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

DESCRIPTION_PLACEHOLDER = "Sin descripción"


class ProductCreate(BaseModel):
    """Fields of the multipart create form, already parsed."""
    name: Optional[str] = None
    description: Optional[str] = None
    # Fits Numeric(10, 2) exactly, so the stored value is the value echoed back
    price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2, allow_inf_nan=False)
    platform_ids: List[int] = []
    used: bool = False

    @field_validator("name", "description", "price", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("used", mode="before")
    @classmethod
    def coerce_used(cls, value: Any) -> bool:
        # Form data sends the flag as text; only a real True or "true" count
        return value is True or value == "true"


class ProductSummary(BaseModel):
    """Item of GET /api/products and body of POST /api/products."""
    id: int
    name: str
    description: Optional[str] = None
    price: float
    release_date: Optional[date] = Field(default=None, alias="releaseDate")
    imageurl: Optional[str] = None

    model_config = {"populate_by_name": True}


class PlatformAssociation(BaseModel):
    id: int
    name: str
    used: bool


class ProductDetail(ProductSummary):
    videourl: Optional[str] = None
    platforms: List[PlatformAssociation] = []
