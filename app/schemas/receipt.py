"""
Schemas Pydantic para notas fiscais e validações
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from typing import List, Literal, Optional

ReceiptStatus = Literal["pending", "approved", "rejected"]
StatusFilter = Literal["pending", "approved", "rejected", "all"]


class ReceiptProductResponse(BaseModel):
    id: UUID
    product_id: UUID
    product_name: Optional[str] = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class ReceiptResponse(BaseModel):
    id: UUID
    receipt_number: str
    store_id: UUID
    store_name: Optional[str] = None
    vendor_id: UUID
    vendor_name: Optional[str] = None
    total_value: Decimal
    receipt_date: date
    status: ReceiptStatus
    rejection_reason: Optional[str] = None
    observation: Optional[str] = None
    validated_at: Optional[datetime] = None
    validated_by: Optional[UUID] = None
    image_url: Optional[str] = None
    products_count: int = 0
    waiting_minutes: Optional[int] = None  # somente para pendentes
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ReceiptDetailResponse(ReceiptResponse):
    items: List[ReceiptProductResponse] = Field(default_factory=list)


class ReceiptListResponse(BaseModel):
    receipts: List[ReceiptResponse]
    total: int
    limit: int
    offset: int


class ValidationStats(BaseModel):
    pending: int
    approved: int  # no mês corrente
    rejected: int  # no mês corrente
    avg_validation_minutes: Optional[float] = None


class ApproveRequest(BaseModel):
    observation: Optional[str] = Field(None, max_length=2000)


class RejectRequest(BaseModel):
    # O motivo vazio é tratado pelo service (400) para manter a mensagem amigável
    rejection_reason: str = Field("", max_length=2000)
    observation: Optional[str] = Field(None, max_length=2000)


class BulkApproveRequest(BaseModel):
    receipt_ids: List[UUID] = Field(..., min_length=1, max_length=500)


class BulkApproveResponse(BaseModel):
    approved_count: int
    receipt_ids: List[UUID]
