from sqlalchemy import Column, String, DateTime, Boolean, UniqueConstraint, Uuid
from sqlalchemy.sql import func
import uuid
from app.database import Base

ROLE_ADMIN = "admin"
ROLE_USER = "user"


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    role = Column(String(20), nullable=False, default=ROLE_USER)
    created_by = Column(Uuid(as_uuid=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AdminPermission(Base):
    __tablename__ = "admin_permissions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(Uuid(as_uuid=True), unique=True, nullable=False, index=True)
    can_validate_receipts = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
