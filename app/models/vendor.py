from sqlalchemy import Column, String, DateTime, ForeignKey, Integer, Numeric, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.database import Base


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    store_id = Column(Uuid(as_uuid=True), ForeignKey("stores.id"), nullable=False, index=True)
    cpf_cnpj = Column(String(14), nullable=True, index=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    # Agregados desnormalizados, recalculados por app.services.stats_service
    receipts_submitted = Column(Integer, nullable=True, default=0)
    receipts_rejected = Column(Integer, nullable=True, default=0)
    monthly_sales = Column(Numeric(12, 2), nullable=True, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    store = relationship("Store", back_populates="vendors")
    receipts = relationship("Receipt", back_populates="vendor")
