"""
Configuração do Celery para tarefas em background
Uso: celery -A app.celery_app worker --beat --loglevel=info
"""
from celery import Celery
from celery.schedules import crontab
from app.config import settings

celery_app = Celery(
    "incentivo",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["app.tasks.stats_tasks"]
)

# Configurações do Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone=settings.TIMEZONE,
    enable_utc=True,
    task_track_started=True,
    task_time_limit=600,  # 10 minutos
    task_soft_time_limit=540,  # 9 minutos
)

# Recálculo noturno dos agregados de vendedores e lojas
celery_app.conf.beat_schedule = {
    "refresh-all-stats-nightly": {
        "task": "refresh_all_stats_task",
        "schedule": crontab(hour=settings.STATS_REFRESH_HOUR, minute=0),
    },
}
