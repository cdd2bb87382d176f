"""
Rate limiting por usuário usando Redis (janela deslizante)
"""
import logging
import time
from typing import Optional
from uuid import UUID
from fastapi import Depends, HTTPException, Request, status
from app.config import settings
from app.database.redis import get_redis
from app.dependencies.auth import get_current_user

logger = logging.getLogger(__name__)

# Fallback in-memory para quando Redis não estiver disponível
_in_memory_limits: dict = {}


async def check_rate_limit(key: str, limit: int, window_seconds: int = 60) -> bool:
    """
    Verifica se a chave excedeu `limit` requisições na janela.

    Returns:
        True se dentro do limite, False se excedeu
    """
    try:
        redis = await get_redis()
        full_key = f"{settings.RATE_LIMIT_PREFIX}{key}"

        now = time.time()
        window_start = now - window_seconds

        await redis.zremrangebyscore(full_key, 0, window_start)
        count = await redis.zcard(full_key)
        if count >= limit:
            logger.warning(f"Rate limit exceeded for key: {key} ({count}/{limit})")
            return False

        await redis.zadd(full_key, {f"{now}": now})
        await redis.expire(full_key, window_seconds)
        return True

    except Exception as e:
        logger.error(f"Error checking rate limit: {e}")

        if settings.DEV_MODE:
            return _check_rate_limit_in_memory(key, limit, window_seconds)

        # Em produção, se Redis falhar, permitir requisição (fail open)
        logger.error("Redis unavailable, allowing request (fail open)")
        return True


def _check_rate_limit_in_memory(key: str, limit: int, window_seconds: int) -> bool:
    current_time = time.time()
    window_start = current_time - window_seconds

    timestamps = [ts for ts in _in_memory_limits.get(key, []) if ts > window_start]
    if len(timestamps) >= limit:
        _in_memory_limits[key] = timestamps
        return False

    timestamps.append(current_time)
    _in_memory_limits[key] = timestamps
    return True


def get_rate_limit_key(request: Request, user_id: Optional[UUID] = None, scope: str = "") -> str:
    """Chave por usuário autenticado ou, sem usuário, pelo IP real do cliente."""
    prefix = f"{scope}:" if scope else ""
    if user_id:
        return f"{prefix}user:{user_id}"

    client_ip = request.client.host if request.client else "unknown"
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()

    return f"{prefix}ip:{client_ip}"


def rate_limiter(scope: str, limit: int, window_seconds: int = 60):
    """
    Cria uma dependência FastAPI que aplica o limite por usuário no escopo dado.

    Uso: dependencies=[Depends(rate_limiter("bulk-approve", 20))]
    """
    async def _dependency(request: Request, user_id: UUID = Depends(get_current_user)) -> None:
        key = get_rate_limit_key(request, user_id, scope)
        if not await check_rate_limit(key, limit, window_seconds):
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="rate limit exceeded"
            )

    return _dependency
