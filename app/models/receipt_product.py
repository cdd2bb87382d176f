from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.database import Base


class ReceiptProduct(Base):
    __tablename__ = "receipt_products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    receipt_id = Column(Uuid(as_uuid=True), ForeignKey("receipts.id"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    receipt = relationship("Receipt", back_populates="items")
    product = relationship("Product", backref="receipt_products")
