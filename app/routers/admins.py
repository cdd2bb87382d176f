"""
Router para gestão de administradores e permissões
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from uuid import UUID
from app.database import get_db
from app.dependencies.auth import get_current_admin
from app.schemas.admin import AdminCreate, AdminPermissionUpdate, AdminResponse
from app.services import admin_service
from app.services.admin_service import AdminAlreadyExistsError, AdminNotFoundError

logger = logging.getLogger(__name__)
router = APIRouter()


def _admin_not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Administrador não encontrado"
    )


@router.get("/admins", response_model=List[AdminResponse], dependencies=[Depends(get_current_admin)])
async def list_admins(db: Session = Depends(get_db)):
    return admin_service.list_admins(db)


@router.post("/admins", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def add_admin(
    request: AdminCreate,
    db: Session = Depends(get_db),
    current_admin: UUID = Depends(get_current_admin),
):
    """Concede papel de admin a um usuário já cadastrado no Supabase Auth"""
    try:
        return admin_service.add_admin(
            db,
            request.user_id,
            can_validate=request.can_validate_receipts,
            created_by=current_admin,
        )
    except AdminAlreadyExistsError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Usuário já é administrador"
        )
    except Exception as e:
        logger.error(f"Erro ao adicionar admin {request.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível adicionar o administrador"
        )


@router.patch("/admins/{user_id}", response_model=AdminResponse, dependencies=[Depends(get_current_admin)])
async def update_admin_permission(
    user_id: UUID,
    request: AdminPermissionUpdate,
    db: Session = Depends(get_db),
):
    try:
        return admin_service.update_permission(db, user_id, request.can_validate_receipts)
    except AdminNotFoundError:
        raise _admin_not_found()


@router.delete("/admins/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_admin(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_admin: UUID = Depends(get_current_admin),
):
    if user_id == current_admin:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Você não pode remover a si mesmo"
        )
    try:
        admin_service.remove_admin(db, user_id)
    except AdminNotFoundError:
        raise _admin_not_found()
