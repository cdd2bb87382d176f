"""
Service de validação de notas fiscais (aprovação / recusa).

Ciclo de vida: pending -> approved | rejected. Uma nota validada
não volta a ser alterada por este sistema.
"""
import logging
from typing import Iterable, List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import and_, func, or_
from app.models.receipt import (
    Receipt,
    STATUS_APPROVED,
    STATUS_PENDING,
    STATUS_REJECTED,
)
from app.models.receipt_product import ReceiptProduct
from app.models.store import Store
from app.models.vendor import Vendor
from app.services.stats_service import refresh_store_revenue, refresh_vendor_stats
from app.utils.dates import as_utc, month_bounds_utc, today, utcnow
from app.utils.search import LIKE_ESCAPE, like_pattern

logger = logging.getLogger(__name__)


class ReceiptValidationError(Exception):
    """Erro base do fluxo de validação"""
    pass


class ReceiptNotFoundError(ReceiptValidationError):
    pass


class InvalidTransitionError(ReceiptValidationError):
    """Nota já foi aprovada ou recusada"""
    pass


class RejectionReasonRequiredError(ReceiptValidationError):
    pass


class BulkApprovalError(ReceiptValidationError):
    def __init__(self, missing_ids: List[UUID], non_pending_ids: List[UUID]):
        self.missing_ids = missing_ids
        self.non_pending_ids = non_pending_ids
        super().__init__(
            f"bulk approval aborted: missing={len(missing_ids)}, non_pending={len(non_pending_ids)}"
        )


def _base_query(db: Session):
    return db.query(Receipt).options(
        joinedload(Receipt.vendor),
        joinedload(Receipt.store),
    )


def list_receipts(
    db: Session,
    status: str = STATUS_PENDING,
    search: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[Receipt], int]:
    """
    Lista notas por aba de status ("all" para todas) e busca livre.

    A busca casa, sem diferenciar maiúsculas, com nome do vendedor,
    nome da loja ou número da nota.
    """
    query = _base_query(db).join(Vendor, Receipt.vendor_id == Vendor.id).join(
        Store, Receipt.store_id == Store.id
    )

    if status != "all":
        query = query.filter(Receipt.status == status)

    if search and search.strip():
        pattern = like_pattern(search)
        query = query.filter(
            or_(
                func.lower(Vendor.name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(Store.name).like(pattern, escape=LIKE_ESCAPE),
                func.lower(Receipt.receipt_number).like(pattern, escape=LIKE_ESCAPE),
            )
        )

    total = query.count()
    receipts = query.order_by(
        Receipt.receipt_date.desc(),
        Receipt.created_at.desc(),
    ).limit(limit).offset(offset).all()

    return receipts, total


def get_validation_stats(db: Session, reference=None) -> dict:
    """
    Contadores dos cards: pendentes (total), aprovadas e recusadas no mês
    corrente e tempo médio de validação em minutos.
    """
    reference = reference or today()
    month_start, month_end = month_bounds_utc(reference.year, reference.month)

    pending = db.query(func.count(Receipt.id)).filter(
        Receipt.status == STATUS_PENDING
    ).scalar() or 0

    def _count_validated(status: str) -> int:
        return db.query(func.count(Receipt.id)).filter(
            and_(
                Receipt.status == status,
                Receipt.validated_at >= month_start,
                Receipt.validated_at < month_end,
            )
        ).scalar() or 0

    validated = db.query(Receipt.created_at, Receipt.validated_at).filter(
        and_(
            Receipt.status.in_([STATUS_APPROVED, STATUS_REJECTED]),
            Receipt.validated_at.isnot(None),
            Receipt.created_at.isnot(None),
        )
    ).all()

    avg_minutes = None
    if validated:
        durations = [
            (as_utc(row.validated_at) - as_utc(row.created_at)).total_seconds() / 60
            for row in validated
        ]
        avg_minutes = round(sum(durations) / len(durations), 1)

    return {
        "pending": pending,
        "approved": _count_validated(STATUS_APPROVED),
        "rejected": _count_validated(STATUS_REJECTED),
        "avg_validation_minutes": avg_minutes,
    }


def get_receipt(db: Session, receipt_id: UUID) -> Receipt:
    receipt = _base_query(db).options(
        joinedload(Receipt.items).joinedload(ReceiptProduct.product)
    ).filter(Receipt.id == receipt_id).first()

    if not receipt:
        raise ReceiptNotFoundError(f"Receipt not found: {receipt_id}")
    return receipt


def serialize_receipt(receipt: Receipt, include_items: bool = False) -> dict:
    """Converte a nota para o formato da listagem (com nomes de vendedor e loja)."""
    waiting_minutes = None
    if receipt.status == STATUS_PENDING and receipt.created_at:
        waiting_minutes = int((utcnow() - as_utc(receipt.created_at)).total_seconds() // 60)

    data = {
        "id": receipt.id,
        "receipt_number": receipt.receipt_number,
        "store_id": receipt.store_id,
        "store_name": receipt.store.name if receipt.store else None,
        "vendor_id": receipt.vendor_id,
        "vendor_name": receipt.vendor.name if receipt.vendor else None,
        "total_value": receipt.total_value,
        "receipt_date": receipt.receipt_date,
        "status": receipt.status,
        "rejection_reason": receipt.rejection_reason,
        "observation": receipt.observation,
        "validated_at": receipt.validated_at,
        "validated_by": receipt.validated_by,
        "image_url": receipt.image_url,
        "products_count": receipt.products_count or 0,
        "waiting_minutes": waiting_minutes,
        "created_at": receipt.created_at,
    }

    if include_items:
        data["items"] = [
            {
                "id": item.id,
                "product_id": item.product_id,
                "product_name": item.product.name if item.product else None,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total_price": item.total_price,
            }
            for item in receipt.items
        ]

    return data


def _transition(
    db: Session,
    receipt: Receipt,
    new_status: str,
    validator_id: UUID,
    observation: Optional[str] = None,
    rejection_reason: Optional[str] = None,
) -> None:
    if receipt.status != STATUS_PENDING:
        raise InvalidTransitionError(
            f"Receipt {receipt.id} is already {receipt.status}"
        )

    values = {
        Receipt.status: new_status,
        Receipt.validated_at: utcnow(),
        Receipt.validated_by: validator_id,
        Receipt.rejection_reason: rejection_reason,
    }
    if observation is not None and observation.strip():
        values[Receipt.observation] = observation.strip()

    # UPDATE condicional: outra sessão pode ter validado a nota depois da leitura
    updated = db.query(Receipt).filter(
        Receipt.id == receipt.id,
        Receipt.status == STATUS_PENDING,
    ).update(values, synchronize_session="fetch")
    if updated != 1:
        raise InvalidTransitionError(f"Receipt {receipt.id} is no longer pending")


def _refresh_aggregates(db: Session, receipts: Iterable[Receipt]) -> None:
    db.flush()
    vendor_ids = {r.vendor_id for r in receipts}
    store_ids = {r.store_id for r in receipts}
    for vendor_id in vendor_ids:
        refresh_vendor_stats(db, vendor_id)
    for store_id in store_ids:
        refresh_store_revenue(db, store_id)


def approve_receipt(
    db: Session,
    receipt_id: UUID,
    validator_id: UUID,
    observation: Optional[str] = None,
) -> Receipt:
    receipt = get_receipt(db, receipt_id)
    try:
        _transition(db, receipt, STATUS_APPROVED, validator_id, observation=observation)
        _refresh_aggregates(db, [receipt])
        db.commit()
        db.refresh(receipt)
    except Exception:
        db.rollback()
        raise

    logger.info(f"receipt_approved: {receipt.id} by {validator_id}")
    return receipt


def reject_receipt(
    db: Session,
    receipt_id: UUID,
    validator_id: UUID,
    rejection_reason: Optional[str],
    observation: Optional[str] = None,
) -> Receipt:
    """
    Recusa uma nota pendente. O motivo é obrigatório e é verificado
    antes de qualquer acesso ao banco.
    """
    reason = (rejection_reason or "").strip()
    if not reason:
        raise RejectionReasonRequiredError("rejection_reason is required")

    receipt = get_receipt(db, receipt_id)
    try:
        _transition(
            db,
            receipt,
            STATUS_REJECTED,
            validator_id,
            observation=observation,
            rejection_reason=reason,
        )
        _refresh_aggregates(db, [receipt])
        db.commit()
        db.refresh(receipt)
    except Exception:
        db.rollback()
        raise

    logger.info(f"receipt_rejected: {receipt.id} by {validator_id}")
    return receipt


def bulk_approve(db: Session, receipt_ids: List[UUID], validator_id: UUID) -> List[Receipt]:
    """
    Aprova um conjunto de notas pendentes numa única transação.
    Se algum id não existir ou não estiver pendente nada é gravado.
    """
    unique_ids = list(dict.fromkeys(receipt_ids))

    receipts = db.query(Receipt).filter(Receipt.id.in_(unique_ids)).all()
    found = {r.id: r for r in receipts}

    missing_ids = [rid for rid in unique_ids if rid not in found]
    non_pending_ids = [rid for rid in unique_ids if rid in found and found[rid].status != STATUS_PENDING]
    if missing_ids or non_pending_ids:
        logger.warning(
            f"bulk_approve_aborted: missing={missing_ids}, non_pending={non_pending_ids}"
        )
        raise BulkApprovalError(missing_ids, non_pending_ids)

    ordered = [found[rid] for rid in unique_ids]
    try:
        for receipt in ordered:
            _transition(db, receipt, STATUS_APPROVED, validator_id)
        _refresh_aggregates(db, ordered)
        db.commit()
    except InvalidTransitionError:
        db.rollback()
        raise BulkApprovalError([], [receipt.id])
    except Exception:
        db.rollback()
        raise

    logger.info(f"bulk_approved: {len(ordered)} receipts by {validator_id}")
    return ordered
