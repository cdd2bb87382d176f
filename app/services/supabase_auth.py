"""
Validação de JWT emitido pelo Supabase Auth (chaves públicas via JWKS)
"""
import logging
from typing import Any, Dict, Optional
import httpx
from jose import jwt, JWTError
from app.config import settings

logger = logging.getLogger(__name__)

JWKS_CACHE: Optional[Dict[str, Any]] = None


class InvalidTokenError(Exception):
    pass


async def get_jwks() -> Dict[str, Any]:
    global JWKS_CACHE
    if JWKS_CACHE:
        return JWKS_CACHE

    if not settings.SUPABASE_JWKS_URL:
        raise InvalidTokenError("SUPABASE_JWKS_URL not configured")

    async with httpx.AsyncClient() as client:
        r = await client.get(settings.SUPABASE_JWKS_URL, timeout=settings.SUPABASE_JWT_TIMEOUT)
        r.raise_for_status()
        JWKS_CACHE = r.json()
        logger.info("Supabase JWKS fetched")
        return JWKS_CACHE


def clear_jwks_cache() -> None:
    global JWKS_CACHE
    JWKS_CACHE = None


async def validate_token(token: str) -> Dict[str, Any]:
    """
    Valida assinatura, audience e expiração do token e retorna o payload.

    Raises:
        InvalidTokenError: token malformado, chave desconhecida ou assinatura inválida
    """
    try:
        unverified = jwt.get_unverified_header(token)
    except JWTError as e:
        raise InvalidTokenError(f"malformed token: {e}")

    jwks = await get_jwks()
    for key in jwks.get("keys", []):
        if key.get("kid") == unverified.get("kid"):
            try:
                return jwt.decode(
                    token,
                    key,
                    audience=settings.SUPABASE_AUDIENCE,
                    algorithms=[key.get("alg", "RS256")],
                )
            except JWTError as e:
                raise InvalidTokenError(str(e))

    raise InvalidTokenError("signing key not found")
