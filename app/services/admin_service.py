"""
Service de administradores: papéis (user_roles) e permissões (admin_permissions)
"""
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import and_
from app.models.admin import AdminPermission, UserRole, ROLE_ADMIN

logger = logging.getLogger(__name__)


class AdminAlreadyExistsError(Exception):
    pass


class AdminNotFoundError(Exception):
    pass


def _admin_role(db: Session, user_id: UUID) -> Optional[UserRole]:
    return db.query(UserRole).filter(
        and_(UserRole.user_id == user_id, UserRole.role == ROLE_ADMIN)
    ).first()


def is_admin(db: Session, user_id: UUID) -> bool:
    return _admin_role(db, user_id) is not None


def can_validate_receipts(db: Session, user_id: UUID) -> bool:
    """
    Admin sem linha em admin_permissions pode validar (padrão True).
    """
    if not is_admin(db, user_id):
        return False
    permission = db.query(AdminPermission).filter(AdminPermission.user_id == user_id).first()
    return permission.can_validate_receipts if permission else True


def list_admins(db: Session) -> List[Dict[str, Any]]:
    roles = db.query(UserRole).filter(UserRole.role == ROLE_ADMIN).order_by(UserRole.created_at.asc()).all()
    if not roles:
        return []

    permissions = {
        p.user_id: p.can_validate_receipts
        for p in db.query(AdminPermission).filter(
            AdminPermission.user_id.in_([r.user_id for r in roles])
        ).all()
    }

    return [
        {
            "user_id": role.user_id,
            "role": role.role,
            "can_validate_receipts": permissions.get(role.user_id, True),
            "created_by": role.created_by,
            "created_at": role.created_at,
        }
        for role in roles
    ]


def add_admin(
    db: Session,
    user_id: UUID,
    can_validate: bool = True,
    created_by: Optional[UUID] = None,
) -> Dict[str, Any]:
    if is_admin(db, user_id):
        raise AdminAlreadyExistsError(f"User {user_id} is already an admin")

    try:
        role = UserRole(user_id=user_id, role=ROLE_ADMIN, created_by=created_by)
        db.add(role)

        permission = db.query(AdminPermission).filter(AdminPermission.user_id == user_id).first()
        if permission:
            permission.can_validate_receipts = can_validate
        else:
            db.add(AdminPermission(user_id=user_id, can_validate_receipts=can_validate))

        db.commit()
        db.refresh(role)
    except Exception as e:
        db.rollback()
        logger.error(f"Error adding admin {user_id}: {e}")
        raise

    logger.info(f"admin_added: {user_id} by {created_by} (can_validate={can_validate})")
    return {
        "user_id": role.user_id,
        "role": role.role,
        "can_validate_receipts": can_validate,
        "created_by": role.created_by,
        "created_at": role.created_at,
    }


def update_permission(db: Session, user_id: UUID, can_validate: bool) -> Dict[str, Any]:
    role = _admin_role(db, user_id)
    if not role:
        raise AdminNotFoundError(f"Admin not found: {user_id}")

    permission = db.query(AdminPermission).filter(AdminPermission.user_id == user_id).first()
    if permission:
        permission.can_validate_receipts = can_validate
    else:
        db.add(AdminPermission(user_id=user_id, can_validate_receipts=can_validate))
    db.commit()

    logger.info(f"admin_permission_updated: {user_id} can_validate={can_validate}")
    return {
        "user_id": role.user_id,
        "role": role.role,
        "can_validate_receipts": can_validate,
        "created_by": role.created_by,
        "created_at": role.created_at,
    }


def remove_admin(db: Session, user_id: UUID) -> None:
    role = _admin_role(db, user_id)
    if not role:
        raise AdminNotFoundError(f"Admin not found: {user_id}")

    try:
        db.delete(role)
        db.query(AdminPermission).filter(AdminPermission.user_id == user_id).delete()
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Error removing admin {user_id}: {e}")
        raise

    logger.info(f"admin_removed: {user_id}")


def ensure_admin(db: Session, user_id: UUID) -> None:
    """Garante papel admin com permissão de validar (usado pelo usuário de desenvolvimento)."""
    if not is_admin(db, user_id):
        add_admin(db, user_id, can_validate=True)
