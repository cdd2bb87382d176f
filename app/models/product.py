from sqlalchemy import Column, String, DateTime, Boolean, Text, Uuid
from sqlalchemy.sql import func
import uuid
from app.database import Base

PRODUCT_SECTORS = ("medicamentos", "suplementos", "veterinario")


class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    sector = Column(String(50), nullable=False, index=True)
    image_url = Column(String(500), nullable=True)
    active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
