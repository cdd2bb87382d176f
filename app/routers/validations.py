"""
Router para validação de notas fiscais (aprovação / recusa)
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from uuid import UUID
from app.config import settings
from app.database import get_db
from app.dependencies.auth import get_current_admin, require_receipt_validator
from app.middleware.rate_limit import rate_limiter
from app.schemas.receipt import (
    ApproveRequest,
    BulkApproveRequest,
    BulkApproveResponse,
    ReceiptDetailResponse,
    ReceiptListResponse,
    ReceiptResponse,
    RejectRequest,
    StatusFilter,
    ValidationStats,
)
from app.services import validation_service
from app.services.validation_service import (
    BulkApprovalError,
    InvalidTransitionError,
    ReceiptNotFoundError,
    RejectionReasonRequiredError,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Nota fiscal não encontrada"
    )


def _already_validated():
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Nota fiscal já foi validada"
    )


@router.get(
    "/validations",
    response_model=ReceiptListResponse,
    dependencies=[Depends(get_current_admin)],
)
async def list_validations(
    status_filter: StatusFilter = Query("pending", alias="status", description="pending | approved | rejected | all"),
    search: Optional[str] = Query(None, max_length=200, description="Vendedor, loja ou número da nota"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """
    Lista notas fiscais por aba de status com busca livre.

    Ordenado por data da nota (mais recentes primeiro).
    Notas pendentes trazem `waiting_minutes` (tempo aguardando validação).
    """
    try:
        receipts, total = validation_service.list_receipts(
            db, status=status_filter, search=search, limit=limit, offset=offset
        )
        return {
            "receipts": [validation_service.serialize_receipt(r) for r in receipts],
            "total": total,
            "limit": limit,
            "offset": offset,
        }
    except Exception as e:
        logger.error(f"Erro ao listar validações: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erro ao listar validações"
        )


@router.get(
    "/validations/stats",
    response_model=ValidationStats,
    dependencies=[Depends(get_current_admin)],
)
async def validation_stats(db: Session = Depends(get_db)):
    """Contadores: pendentes, aprovadas/recusadas no mês e tempo médio de validação."""
    try:
        return validation_service.get_validation_stats(db)
    except Exception as e:
        logger.error(f"Erro ao calcular estatísticas de validação: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erro ao calcular estatísticas"
        )


@router.post(
    "/validations/bulk-approve",
    response_model=BulkApproveResponse,
    dependencies=[Depends(rate_limiter("bulk-approve", settings.BULK_APPROVE_LIMIT_PER_MINUTE))],
    responses={
        409: {"description": "Alguma nota não existe ou não está pendente; nada foi gravado"},
        429: {"description": "Rate limit excedido"},
    },
)
async def bulk_approve(
    request: BulkApproveRequest,
    db: Session = Depends(get_db),
    validator_id: UUID = Depends(require_receipt_validator),
):
    """
    Aprova as notas selecionadas numa única transação.

    Se qualquer nota não estiver pendente, nenhuma é aprovada;
    o cliente deve recarregar a lista após o sucesso.
    """
    try:
        receipts = validation_service.bulk_approve(db, request.receipt_ids, validator_id)
        return BulkApproveResponse(
            approved_count=len(receipts),
            receipt_ids=[r.id for r in receipts],
        )
    except BulkApprovalError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "Nenhuma nota foi aprovada: há notas inexistentes ou já validadas",
                "missing_ids": [str(i) for i in e.missing_ids],
                "non_pending_ids": [str(i) for i in e.non_pending_ids],
            }
        )
    except Exception as e:
        logger.error(f"Erro na aprovação em lote: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível aprovar as notas selecionadas"
        )


@router.get(
    "/validations/{receipt_id}",
    response_model=ReceiptDetailResponse,
    dependencies=[Depends(get_current_admin)],
)
async def get_validation(receipt_id: UUID, db: Session = Depends(get_db)):
    """Detalhes da nota, incluindo imagem e produtos."""
    try:
        receipt = validation_service.get_receipt(db, receipt_id)
        return validation_service.serialize_receipt(receipt, include_items=True)
    except ReceiptNotFoundError:
        raise _not_found()
    except Exception as e:
        logger.error(f"Erro ao buscar nota {receipt_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erro ao buscar nota fiscal"
        )


@router.post(
    "/validations/{receipt_id}/approve",
    response_model=ReceiptResponse,
    responses={404: {"description": "Nota não encontrada"}, 409: {"description": "Nota já validada"}},
)
async def approve(
    receipt_id: UUID,
    request: Optional[ApproveRequest] = None,
    db: Session = Depends(get_db),
    validator_id: UUID = Depends(require_receipt_validator),
):
    observation = request.observation if request else None
    try:
        receipt = validation_service.approve_receipt(db, receipt_id, validator_id, observation=observation)
        return validation_service.serialize_receipt(receipt)
    except ReceiptNotFoundError:
        raise _not_found()
    except InvalidTransitionError:
        raise _already_validated()
    except Exception as e:
        logger.error(f"Erro ao aprovar nota {receipt_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível aprovar a nota fiscal"
        )


@router.post(
    "/validations/{receipt_id}/reject",
    response_model=ReceiptResponse,
    responses={
        400: {"description": "Motivo da recusa obrigatório"},
        404: {"description": "Nota não encontrada"},
        409: {"description": "Nota já validada"},
    },
)
async def reject(
    receipt_id: UUID,
    request: RejectRequest,
    db: Session = Depends(get_db),
    validator_id: UUID = Depends(require_receipt_validator),
):
    try:
        receipt = validation_service.reject_receipt(
            db,
            receipt_id,
            validator_id,
            rejection_reason=request.rejection_reason,
            observation=request.observation,
        )
        return validation_service.serialize_receipt(receipt)
    except RejectionReasonRequiredError:
        logger.warning(f"Reject without reason: receipt={receipt_id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Motivo obrigatório: informe o motivo da recusa"
        )
    except ReceiptNotFoundError:
        raise _not_found()
    except InvalidTransitionError:
        raise _already_validated()
    except Exception as e:
        logger.error(f"Erro ao recusar nota {receipt_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível recusar a nota fiscal"
        )
