"""
Schemas Pydantic para administradores
"""
from pydantic import BaseModel
from datetime import datetime
from uuid import UUID
from typing import Optional


class AdminCreate(BaseModel):
    user_id: UUID
    can_validate_receipts: bool = True


class AdminPermissionUpdate(BaseModel):
    can_validate_receipts: bool


class AdminResponse(BaseModel):
    user_id: UUID
    role: str
    can_validate_receipts: bool
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None


class ImportResult(BaseModel):
    imported: int
    errors: list[dict]
