"""
Schemas Pydantic para o catálogo de produtos
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from uuid import UUID
from typing import List, Optional
from app.models.product import PRODUCT_SECTORS


def _validate_sector(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    sector = v.strip().lower()
    if sector not in PRODUCT_SECTORS:
        raise ValueError(f"setor inválido, use um de: {', '.join(PRODUCT_SECTORS)}")
    return sector


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    sector: str
    image_url: Optional[str] = Field(None, max_length=500)

    @field_validator("sector")
    @classmethod
    def validate_sector(cls, v: str) -> str:
        return _validate_sector(v)


class ProductCreate(ProductBase):
    active: bool = True


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    sector: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    active: Optional[bool] = None

    @field_validator("sector")
    @classmethod
    def validate_sector(cls, v: Optional[str]) -> Optional[str]:
        return _validate_sector(v)


class ProductResponse(ProductBase):
    id: UUID
    active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    products: List[ProductResponse]
    total: int
    limit: int
    offset: int


class ProductSummary(BaseModel):
    total_products: int
    inactive_products: int
