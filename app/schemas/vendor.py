"""
Schemas Pydantic para vendedores
"""
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from typing import List, Literal, Optional
from app.utils.documents import normalize_cpf_cnpj, is_valid_cpf_cnpj

VendorSortField = Literal["name", "store", "receipts_submitted", "receipts_rejected", "monthly_sales"]


def _validate_document(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    digits = normalize_cpf_cnpj(v)
    if not is_valid_cpf_cnpj(digits):
        raise ValueError("CPF/CNPJ inválido")
    return digits


class VendorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    cpf_cnpj: str = Field(..., min_length=11, max_length=18)
    phone: str = Field(..., min_length=8, max_length=20)
    email: EmailStr
    store_id: UUID

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("nome obrigatório")
        return v.strip()

    @field_validator("cpf_cnpj")
    @classmethod
    def validate_cpf_cnpj(cls, v: str) -> str:
        return _validate_document(v)


class VendorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    cpf_cnpj: Optional[str] = Field(None, min_length=11, max_length=18)
    phone: Optional[str] = Field(None, min_length=8, max_length=20)
    email: Optional[EmailStr] = None
    store_id: Optional[UUID] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("nome obrigatório")
        return v.strip()

    @field_validator("store_id")
    @classmethod
    def store_required(cls, v: Optional[UUID]) -> UUID:
        if v is None:
            raise ValueError("loja obrigatória")
        return v

    @field_validator("cpf_cnpj")
    @classmethod
    def validate_cpf_cnpj(cls, v: Optional[str]) -> Optional[str]:
        return _validate_document(v)


class VendorResponse(BaseModel):
    id: UUID
    name: str
    store_id: UUID
    store: Optional[str] = None  # nome da loja
    cpf_cnpj: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    receipts_submitted: int = 0
    receipts_rejected: int = 0
    monthly_sales: Decimal = Decimal("0")
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class VendorListResponse(BaseModel):
    vendors: List[VendorResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
    stores: List[str]  # lojas distintas para o filtro


class VendorSummary(BaseModel):
    total_vendors: int
    total_rejected: int
    total_sales: Decimal
