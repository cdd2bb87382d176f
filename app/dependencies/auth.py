from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from uuid import UUID
import logging
from app.database import get_db
from app.config import settings
from app.services import admin_service
from app.services.supabase_auth import validate_token, InvalidTokenError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def parse_raw_auth_header(request: Request) -> Optional[str]:
    """Retorna o token puro caso Authorization não siga o esquema 'Bearer <token>'."""
    header = request.headers.get("authorization")
    if not header:
        return None
    parts = header.strip().split()
    if len(parts) == 1:
        return parts[0]
    if len(parts) >= 2:
        return parts[1]
    return None


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    cred: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UUID:
    """
    Dependência para rotas autenticadas. Retorna o id do usuário (sub do JWT).
    - Aceita 'Authorization: Bearer <token>' ou só '<token>'
    - Em DEV_MODE o token 'test' autentica o admin de desenvolvimento
    """
    token = cred.credentials if cred else parse_raw_auth_header(request)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing"
        )

    if settings.DEV_MODE and token == "test":
        dev_admin_id = UUID(settings.DEV_ADMIN_ID)
        admin_service.ensure_admin(db, dev_admin_id)
        logger.info(f"Authenticated user (dev token): {dev_admin_id}")
        return dev_admin_id

    try:
        payload = await validate_token(token)
    except InvalidTokenError as e:
        logger.warning(f"Invalid token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    except Exception as e:
        logger.error(f"Unexpected error during authentication: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication failed"
        )

    try:
        user_id = UUID(payload.get("sub", ""))
    except (ValueError, TypeError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing 'sub' claim"
        )

    logger.info(f"Authenticated user (Supabase): {user_id}")
    return user_id


async def get_current_admin(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user),
) -> UUID:
    """Exige papel admin em user_roles."""
    if not admin_service.is_admin(db, user_id):
        logger.warning(f"Admin access denied: {user_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso restrito a administradores"
        )
    return user_id


async def require_receipt_validator(
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_admin),
) -> UUID:
    """Exige admin com can_validate_receipts."""
    if not admin_service.can_validate_receipts(db, user_id):
        logger.warning(f"Receipt validation denied: {user_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Sem permissão para validar notas fiscais"
        )
    return user_id
