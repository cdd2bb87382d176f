from app.schemas.store import StoreCreate, StoreUpdate, StoreResponse
from app.schemas.vendor import VendorCreate, VendorUpdate, VendorResponse, VendorListResponse, VendorSummary
from app.schemas.product import ProductCreate, ProductUpdate, ProductResponse, ProductListResponse, ProductSummary
from app.schemas.receipt import (
    ReceiptResponse,
    ReceiptDetailResponse,
    ReceiptListResponse,
    ValidationStats,
    ApproveRequest,
    RejectRequest,
    BulkApproveRequest,
    BulkApproveResponse,
)
from app.schemas.admin import AdminCreate, AdminPermissionUpdate, AdminResponse, ImportResult

__all__ = [
    "StoreCreate",
    "StoreUpdate",
    "StoreResponse",
    "VendorCreate",
    "VendorUpdate",
    "VendorResponse",
    "VendorListResponse",
    "VendorSummary",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",
    "ProductSummary",
    "ReceiptResponse",
    "ReceiptDetailResponse",
    "ReceiptListResponse",
    "ValidationStats",
    "ApproveRequest",
    "RejectRequest",
    "BulkApproveRequest",
    "BulkApproveResponse",
    "AdminCreate",
    "AdminPermissionUpdate",
    "AdminResponse",
    "ImportResult",
]
