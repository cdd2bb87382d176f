"""
Utilitários de datas para agregados mensais
"""
from datetime import date, datetime, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo
from app.config import settings


def today() -> date:
    """Data corrente no fuso configurado (America/Sao_Paulo por padrão)."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite devolve datetimes sem tzinfo; assume UTC nesses casos."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """Retorna [início, fim) do mês."""
    start = date(year, month, 1)
    if month == 12:
        end = date(year + 1, 1, 1)
    else:
        end = date(year, month + 1, 1)
    return start, end


def month_bounds_utc(year: int, month: int) -> Tuple[datetime, datetime]:
    """
    [início, fim) do mês no fuso configurado, convertidos para UTC.
    Usado para filtrar colunas de timestamp (validated_at).
    """
    tz = ZoneInfo(settings.TIMEZONE)
    start, end = month_bounds(year, month)
    return (
        datetime(start.year, start.month, start.day, tzinfo=tz).astimezone(timezone.utc),
        datetime(end.year, end.month, end.day, tzinfo=tz).astimezone(timezone.utc),
    )


def previous_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1
