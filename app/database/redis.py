"""
Conexão Redis para rate limiting
"""
import logging
import redis.asyncio as redis
from app.config import settings

logger = logging.getLogger(__name__)

redis_client = None


async def get_redis():
    """
    Retorna cliente Redis singleton.
    Cria conexão se não existir.
    """
    global redis_client

    if redis_client is None:
        redis_client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=2,
        )
        logger.info(f"Redis client created: {settings.REDIS_URL}")

    return redis_client


async def close_redis():
    """Fecha conexão Redis."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis connection closed")
