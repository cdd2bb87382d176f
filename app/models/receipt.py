from sqlalchemy import Column, String, DateTime, Date, ForeignKey, Integer, Numeric, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.database import Base

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
RECEIPT_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)


class Receipt(Base):
    __tablename__ = "receipts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    receipt_number = Column(String(100), nullable=False, index=True)
    store_id = Column(Uuid(as_uuid=True), ForeignKey("stores.id"), nullable=False, index=True)
    vendor_id = Column(Uuid(as_uuid=True), ForeignKey("vendors.id"), nullable=False, index=True)
    total_value = Column(Numeric(12, 2), nullable=False)
    receipt_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=STATUS_PENDING, index=True)
    rejection_reason = Column(Text, nullable=True)
    observation = Column(Text, nullable=True)
    validated_at = Column(DateTime(timezone=True), nullable=True)
    validated_by = Column(Uuid(as_uuid=True), nullable=True)
    image_url = Column(String(500), nullable=True)
    products_count = Column(Integer, nullable=True, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    store = relationship("Store", back_populates="receipts")
    vendor = relationship("Vendor", back_populates="receipts")
    items = relationship("ReceiptProduct", back_populates="receipt", cascade="all, delete-orphan")
