"""
Schemas Pydantic para lojas
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import Optional


class StoreBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    region: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=500)

    @field_validator("name", "region", "address")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("campo obrigatório")
        return v.strip()


class StoreCreate(StoreBase):
    pass


class StoreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    region: Optional[str] = Field(None, min_length=1, max_length=100)
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    phone: Optional[str] = Field(None, max_length=20)

    @field_validator("name", "region", "address")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> str:
        # null explícito não pode apagar campo obrigatório
        if v is None or not v.strip():
            raise ValueError("campo obrigatório")
        return v.strip()


class StoreResponse(StoreBase):
    id: UUID
    phone: Optional[str] = None
    monthly_revenue: Decimal = Decimal("0")
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("monthly_revenue", mode="before")
    @classmethod
    def default_revenue(cls, v):
        return v if v is not None else Decimal("0")
