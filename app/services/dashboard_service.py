"""
Serviço do dashboard: cards de resumo, desempenho por região e curva ABC de produtos
"""
import logging
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_, func
from app.models.product import Product
from app.models.receipt import Receipt, STATUS_APPROVED, STATUS_PENDING
from app.models.receipt_product import ReceiptProduct
from app.models.store import Store
from app.utils.dates import month_bounds, previous_month, today

logger = logging.getLogger(__name__)

# Participação acumulada de faturamento que delimita as classes A e B
ABC_A_THRESHOLD = Decimal("0.80")
ABC_B_THRESHOLD = Decimal("0.95")

CENTS = Decimal("0.01")


def _variation(current: Decimal, previous: Decimal) -> Optional[float]:
    if not previous:
        return None
    return round(float((current - previous) / previous * 100), 1)


def _month_totals(db: Session, year: int, month: int) -> Dict[str, Decimal]:
    start, end = month_bounds(year, month)
    count, total = db.query(
        func.count(Receipt.id),
        func.sum(Receipt.total_value),
    ).filter(
        and_(
            Receipt.status == STATUS_APPROVED,
            Receipt.receipt_date >= start,
            Receipt.receipt_date < end,
        )
    ).one()

    count = Decimal(count or 0)
    total = Decimal(total or 0).quantize(CENTS)
    average = (total / count).quantize(CENTS, rounding=ROUND_HALF_UP) if count else Decimal("0.00")
    return {"sales": count, "value": total, "average": average}


def get_dashboard_stats(db: Session, year: Optional[int] = None, month: Optional[int] = None) -> Dict[str, Any]:
    """
    Cards do topo do dashboard: vendas aprovadas, valor total, ticket médio
    (com variação vs mês anterior) e validações pendentes.
    """
    if year is None or month is None:
        reference = today()
        year, month = reference.year, reference.month

    current = _month_totals(db, year, month)
    previous = _month_totals(db, *previous_month(year, month))

    pending = db.query(func.count(Receipt.id)).filter(
        Receipt.status == STATUS_PENDING
    ).scalar() or 0

    return {
        "year": year,
        "month": month,
        "total_sales": {
            "value": current["sales"],
            "variation_percent": _variation(current["sales"], previous["sales"]),
        },
        "total_value": {
            "value": current["value"],
            "variation_percent": _variation(current["value"], previous["value"]),
        },
        "average_ticket": {
            "value": current["average"],
            "variation_percent": _variation(current["average"], previous["average"]),
        },
        "pending_validations": pending,
    }


def get_region_performance(db: Session, days: int = 30, reference=None) -> List[Dict[str, Any]]:
    """
    Quantidade de vendas e faturamento por região nos últimos `days` dias.
    Regiões sem vendas aprovadas não aparecem.
    """
    reference = reference or today()
    since = reference - timedelta(days=days)

    rows = db.query(
        Store.region,
        func.count(Receipt.id).label("sales"),
        func.sum(Receipt.total_value).label("revenue"),
    ).join(
        Store, Receipt.store_id == Store.id
    ).filter(
        and_(
            Receipt.status == STATUS_APPROVED,
            Receipt.receipt_date > since,
            Receipt.receipt_date <= reference,
        )
    ).group_by(
        Store.region
    ).order_by(
        func.sum(Receipt.total_value).desc()
    ).all()

    return [
        {
            "region": row.region,
            "sales": row.sales,
            "revenue": Decimal(row.revenue or 0).quantize(CENTS),
        }
        for row in rows
    ]


def classify_abc(revenues: List[Decimal]) -> List[str]:
    """
    Classifica uma lista de faturamentos já ordenada (maior primeiro).

    Um item é A enquanto a participação acumulada dos itens acima dele é
    menor que 80%, B enquanto menor que 95%, e C no restante.
    """
    total = sum(revenues, Decimal("0"))
    if not total:
        return ["C"] * len(revenues)

    classes = []
    accumulated = Decimal("0")
    for revenue in revenues:
        share_before = accumulated / total
        if share_before < ABC_A_THRESHOLD:
            classes.append("A")
        elif share_before < ABC_B_THRESHOLD:
            classes.append("B")
        else:
            classes.append("C")
        accumulated += revenue
    return classes


def get_product_performance(
    db: Session,
    category: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Produtos ordenados por faturamento (itens de notas aprovadas) com classe ABC.
    """
    rows = db.query(
        Product.id,
        Product.name,
        func.sum(ReceiptProduct.quantity).label("quantity"),
        func.sum(ReceiptProduct.total_price).label("revenue"),
    ).join(
        ReceiptProduct, ReceiptProduct.product_id == Product.id
    ).join(
        Receipt, ReceiptProduct.receipt_id == Receipt.id
    ).filter(
        Receipt.status == STATUS_APPROVED
    ).group_by(
        Product.id,
        Product.name
    ).order_by(
        func.sum(ReceiptProduct.total_price).desc(),
        Product.name.asc()
    ).all()

    revenues = [Decimal(row.revenue or 0) for row in rows]
    classes = classify_abc(revenues)

    products = [
        {
            "product_id": row.id,
            "name": row.name,
            "quantity": int(row.quantity or 0),
            "revenue": revenue.quantize(CENTS),
            "category": abc,
        }
        for row, revenue, abc in zip(rows, revenues, classes)
    ]

    if category:
        products = [p for p in products if p["category"] == category]
    if limit:
        products = products[:limit]

    logger.info(f"Product performance computed: {len(products)} products (category={category})")
    return products


def get_pending_panel(db: Session, limit: int = 5) -> List[Receipt]:
    """Notas pendentes mais antigas para o painel lateral do dashboard."""
    return db.query(Receipt).filter(
        Receipt.status == STATUS_PENDING
    ).order_by(
        Receipt.created_at.asc(),
        Receipt.receipt_date.asc()
    ).limit(limit).all()
