from sqlalchemy import Column, String, DateTime, Numeric, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.database import Base


class Store(Base):
    __tablename__ = "stores"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    region = Column(String(100), nullable=False, index=True)
    address = Column(String(500), nullable=False)
    phone = Column(String(20), nullable=True)
    monthly_revenue = Column(Numeric(12, 2), nullable=True, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    vendors = relationship("Vendor", back_populates="store")
    receipts = relationship("Receipt", back_populates="store")
