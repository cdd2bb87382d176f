from app.database import Base
from app.models.store import Store
from app.models.vendor import Vendor
from app.models.product import Product
from app.models.receipt import Receipt
from app.models.receipt_product import ReceiptProduct
from app.models.admin import UserRole, AdminPermission

__all__ = [
    "Base",
    "Store",
    "Vendor",
    "Product",
    "Receipt",
    "ReceiptProduct",
    "UserRole",
    "AdminPermission",
]
