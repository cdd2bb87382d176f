"""
Router para o dashboard administrativo
"""
import logging
from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.dependencies.auth import get_current_admin
from app.schemas.dashboard import DashboardStats, ProductPerformance, RegionPerformance
from app.schemas.receipt import ReceiptResponse
from app.services import dashboard_service, validation_service

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    """
    Cards de resumo do mês (padrão: mês corrente):
    - total de vendas aprovadas
    - valor total
    - ticket médio
    - validações pendentes

    Cada card traz a variação percentual vs mês anterior
    (null quando o mês anterior não teve vendas).
    """
    if (year is None) != (month is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Informe ano e mês juntos"
        )
    try:
        return dashboard_service.get_dashboard_stats(db, year=year, month=month)
    except Exception as e:
        logger.error(f"Erro ao calcular estatísticas do dashboard: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erro ao calcular estatísticas"
        )


@router.get("/dashboard/regions", response_model=List[RegionPerformance])
async def region_performance(
    days: int = Query(settings.DASHBOARD_REGION_DAYS, ge=1, le=365),
    db: Session = Depends(get_db),
):
    """Vendas e faturamento por região nos últimos `days` dias"""
    return dashboard_service.get_region_performance(db, days=days)


@router.get("/dashboard/products", response_model=List[ProductPerformance])
async def product_performance(
    category: Optional[Literal["A", "B", "C"]] = Query(None, description="Filtra pela classe ABC"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Produtos por faturamento com classificação ABC (curva de Pareto)"""
    try:
        return dashboard_service.get_product_performance(db, category=category, limit=limit)
    except Exception as e:
        logger.error(f"Erro ao calcular desempenho de produtos: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erro ao calcular desempenho de produtos"
        )


@router.get("/dashboard/pending", response_model=List[ReceiptResponse])
async def pending_panel(
    limit: int = Query(settings.DASHBOARD_PENDING_LIMIT, ge=1, le=50),
    db: Session = Depends(get_db),
):
    """Notas pendentes mais antigas (painel de validação rápida)"""
    receipts = dashboard_service.get_pending_panel(db, limit=limit)
    return [validation_service.serialize_receipt(r) for r in receipts]
