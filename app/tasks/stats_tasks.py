"""
Tasks do Celery para recálculo dos agregados de vendedores e lojas
"""
import logging
from app.celery_app import celery_app
from app.database import SessionLocal
from app.services.stats_service import refresh_all_stats

logger = logging.getLogger(__name__)


@celery_app.task(name="refresh_all_stats_task", bind=True, max_retries=3)
def refresh_all_stats_task(self):
    """
    Recalcula receipts_submitted, receipts_rejected e monthly_sales dos
    vendedores e monthly_revenue das lojas. Na virada do mês zera as
    vendas do mês anterior.
    """
    db = SessionLocal()
    try:
        logger.info("Refreshing vendor and store stats")
        result = refresh_all_stats(db)
        return {"status": "completed", **result}
    except Exception as e:
        logger.error(f"Error refreshing stats: {e}", exc_info=True)
        # Retry com backoff exponencial
        raise self.retry(exc=e, countdown=2 ** self.request.retries * 60)
    finally:
        db.close()
