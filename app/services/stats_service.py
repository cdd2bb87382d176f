"""
Recalcula os agregados desnormalizados de vendedores e lojas
(receipts_submitted, receipts_rejected, monthly_sales, monthly_revenue).
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import func, and_
from app.models.receipt import Receipt, STATUS_APPROVED, STATUS_REJECTED
from app.models.store import Store
from app.models.vendor import Vendor
from app.utils.dates import today, month_bounds

logger = logging.getLogger(__name__)


def _approved_total(db: Session, column, value: UUID, reference: date) -> Decimal:
    start, end = month_bounds(reference.year, reference.month)
    total = db.query(func.sum(Receipt.total_value)).filter(
        and_(
            column == value,
            Receipt.status == STATUS_APPROVED,
            Receipt.receipt_date >= start,
            Receipt.receipt_date < end,
        )
    ).scalar()
    return Decimal(total) if total is not None else Decimal("0")


def refresh_vendor_stats(db: Session, vendor_id: UUID, reference: Optional[date] = None) -> Optional[Vendor]:
    """
    Atualiza contadores do vendedor. Não faz commit: o chamador decide a transação.
    """
    vendor = db.query(Vendor).filter(Vendor.id == vendor_id).first()
    if not vendor:
        logger.warning(f"Vendor not found for stats refresh: {vendor_id}")
        return None

    reference = reference or today()

    vendor.receipts_submitted = db.query(func.count(Receipt.id)).filter(
        Receipt.vendor_id == vendor_id
    ).scalar() or 0
    vendor.receipts_rejected = db.query(func.count(Receipt.id)).filter(
        and_(Receipt.vendor_id == vendor_id, Receipt.status == STATUS_REJECTED)
    ).scalar() or 0
    vendor.monthly_sales = _approved_total(db, Receipt.vendor_id, vendor_id, reference)

    return vendor


def refresh_store_revenue(db: Session, store_id: UUID, reference: Optional[date] = None) -> Optional[Store]:
    store = db.query(Store).filter(Store.id == store_id).first()
    if not store:
        logger.warning(f"Store not found for revenue refresh: {store_id}")
        return None

    store.monthly_revenue = _approved_total(db, Receipt.store_id, store_id, reference or today())
    return store


def refresh_all_stats(db: Session, reference: Optional[date] = None) -> dict:
    """Recalcula agregados de todos os vendedores e lojas e faz commit."""
    reference = reference or today()
    try:
        vendor_ids = [row.id for row in db.query(Vendor.id).all()]
        store_ids = [row.id for row in db.query(Store.id).all()]

        for vendor_id in vendor_ids:
            refresh_vendor_stats(db, vendor_id, reference)
        for store_id in store_ids:
            refresh_store_revenue(db, store_id, reference)

        db.commit()
        logger.info(f"Stats refreshed: vendors={len(vendor_ids)}, stores={len(store_ids)}")
        return {"vendors": len(vendor_ids), "stores": len(store_ids)}
    except Exception as e:
        db.rollback()
        logger.error(f"Error refreshing stats: {e}")
        raise
