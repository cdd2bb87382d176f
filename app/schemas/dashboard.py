"""
Schemas Pydantic para o dashboard
"""
from pydantic import BaseModel
from decimal import Decimal
from uuid import UUID
from typing import List, Literal, Optional

AbcClass = Literal["A", "B", "C"]


class StatCard(BaseModel):
    value: Decimal
    variation_percent: Optional[float] = None  # vs mês anterior


class DashboardStats(BaseModel):
    year: int
    month: int
    total_sales: StatCard
    total_value: StatCard
    average_ticket: StatCard
    pending_validations: int


class RegionPerformance(BaseModel):
    region: str
    sales: int
    revenue: Decimal


class ProductPerformance(BaseModel):
    product_id: UUID
    name: str
    quantity: int
    revenue: Decimal
    category: AbcClass
