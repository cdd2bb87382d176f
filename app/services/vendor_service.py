"""
Service de vendedores: cadastro, listagem com filtro por loja, ordenação e paginação
"""
import logging
import math
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func
from app.models.receipt import Receipt
from app.models.store import Store
from app.models.vendor import Vendor
from app.schemas.vendor import VendorCreate, VendorUpdate
from app.services.store_service import StoreNotFoundError

logger = logging.getLogger(__name__)

ALL_STORES = "all"

SORT_COLUMNS = {
    "name": func.lower(Vendor.name),
    "store": func.lower(Store.name),
    "receipts_submitted": func.coalesce(Vendor.receipts_submitted, 0),
    "receipts_rejected": func.coalesce(Vendor.receipts_rejected, 0),
    "monthly_sales": func.coalesce(Vendor.monthly_sales, 0),
}


class VendorNotFoundError(Exception):
    pass


class VendorInUseError(Exception):
    """Vendedor possui notas fiscais"""
    pass


def serialize_vendor(vendor: Vendor) -> Dict[str, Any]:
    return {
        "id": vendor.id,
        "name": vendor.name,
        "store_id": vendor.store_id,
        "store": vendor.store.name if vendor.store else None,
        "cpf_cnpj": vendor.cpf_cnpj,
        "phone": vendor.phone,
        "email": vendor.email,
        "receipts_submitted": vendor.receipts_submitted or 0,
        "receipts_rejected": vendor.receipts_rejected or 0,
        "monthly_sales": vendor.monthly_sales if vendor.monthly_sales is not None else Decimal("0"),
        "created_at": vendor.created_at,
    }


class VendorService:
    def __init__(self, db: Session):
        self.db = db

    def list_vendors(
        self,
        store: Optional[str] = None,
        sort_field: Optional[str] = None,
        sort_direction: str = "asc",
        page: int = 1,
        per_page: int = 10,
    ) -> Dict[str, Any]:
        """
        Lista vendedores.

        Args:
            store: Nome da loja; "all" ou None não filtra
            sort_field: name | store | receipts_submitted | receipts_rejected | monthly_sales
            sort_direction: asc | desc
            page: Página começando em 1
            per_page: Itens por página

        Returns:
            Dict com vendors, total, page, per_page, total_pages e stores (nomes para o filtro)
        """
        query = self.db.query(Vendor).join(Store, Vendor.store_id == Store.id).options(
            joinedload(Vendor.store)
        )

        if store and store != ALL_STORES:
            query = query.filter(Store.name == store)

        if sort_field:
            column = SORT_COLUMNS[sort_field]
            order = column.desc() if sort_direction == "desc" else column.asc()
            query = query.order_by(order, Vendor.created_at.asc())
        else:
            query = query.order_by(Vendor.created_at.asc())

        total = query.count()
        total_pages = math.ceil(total / per_page) if total else 0
        vendors = query.offset((page - 1) * per_page).limit(per_page).all()

        store_names = [
            row.name
            for row in self.db.query(Store.name).join(Vendor, Vendor.store_id == Store.id).distinct().all()
        ]

        return {
            "vendors": [serialize_vendor(v) for v in vendors],
            "total": total,
            "page": page,
            "per_page": per_page,
            "total_pages": total_pages,
            "stores": sorted(store_names),
        }

    def get_by_id(self, vendor_id: UUID) -> Optional[Vendor]:
        return self.db.query(Vendor).options(joinedload(Vendor.store)).filter(Vendor.id == vendor_id).first()

    def get_or_raise(self, vendor_id: UUID) -> Vendor:
        vendor = self.get_by_id(vendor_id)
        if not vendor:
            raise VendorNotFoundError(f"Vendor not found: {vendor_id}")
        return vendor

    def _ensure_store(self, store_id: UUID) -> Store:
        store = self.db.query(Store).filter(Store.id == store_id).first()
        if not store:
            raise StoreNotFoundError(f"Store not found: {store_id}")
        return store

    def create(self, vendor_data: VendorCreate, commit: bool = True) -> Vendor:
        self._ensure_store(vendor_data.store_id)

        vendor = Vendor(
            **vendor_data.model_dump(),
            receipts_submitted=0,
            receipts_rejected=0,
            monthly_sales=0,
        )
        self.db.add(vendor)
        if commit:
            self.db.commit()
            self.db.refresh(vendor)
            logger.info(f"vendor_created: {vendor.id} ({vendor.name})")
        return vendor

    def update(self, vendor_id: UUID, vendor_data: VendorUpdate) -> Vendor:
        vendor = self.get_or_raise(vendor_id)

        update_data = vendor_data.model_dump(exclude_unset=True)
        if update_data.get("store_id"):
            self._ensure_store(update_data["store_id"])

        try:
            for field, value in update_data.items():
                setattr(vendor, field, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(vendor)
        logger.info(f"vendor_updated: {vendor_id} fields={list(update_data)}")
        return vendor

    def delete(self, vendor_id: UUID) -> None:
        vendor = self.get_or_raise(vendor_id)

        receipts = self.db.query(Receipt).filter(Receipt.vendor_id == vendor_id).count()
        if receipts:
            raise VendorInUseError(f"Vendor {vendor_id} has {receipts} receipts")

        self.db.delete(vendor)
        self.db.commit()
        logger.info(f"vendor_deleted: {vendor_id}")

    def summary(self) -> Dict[str, Any]:
        total, rejected, sales = self.db.query(
            func.count(Vendor.id),
            func.sum(Vendor.receipts_rejected),
            func.sum(Vendor.monthly_sales),
        ).one()
        return {
            "total_vendors": total or 0,
            "total_rejected": int(rejected or 0),
            "total_sales": Decimal(sales or 0),
        }
