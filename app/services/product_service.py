from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Optional, Tuple
from uuid import UUID
import logging
from app.models.product import Product
from app.models.receipt_product import ReceiptProduct
from app.schemas.product import ProductCreate, ProductUpdate
from app.utils.search import LIKE_ESCAPE, like_pattern

logger = logging.getLogger(__name__)


class ProductNotFoundError(Exception):
    pass


class ProductInUseError(Exception):
    """Produto já aparece em notas fiscais"""
    pass


class ProductService:
    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        sector: Optional[str] = None,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Product], int]:
        """Retorna produtos filtrados e o total antes da paginação"""
        query = self.db.query(Product)
        if sector:
            query = query.filter(Product.sector == sector)
        if active is not None:
            query = query.filter(Product.active == active)
        if search and search.strip():
            query = query.filter(func.lower(Product.name).like(like_pattern(search), escape=LIKE_ESCAPE))

        total = query.count()
        products = query.order_by(Product.name.asc()).offset(skip).limit(limit).all()
        return products, total

    def get_by_id(self, product_id: UUID) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_or_raise(self, product_id: UUID) -> Product:
        product = self.get_by_id(product_id)
        if not product:
            raise ProductNotFoundError(f"Product not found: {product_id}")
        return product

    def create(self, product_data: ProductCreate) -> Product:
        db_product = Product(**product_data.model_dump())
        self.db.add(db_product)
        self.db.commit()
        self.db.refresh(db_product)
        logger.info(f"product_created: {db_product.id} ({db_product.name})")
        return db_product

    def update(self, product_id: UUID, product_data: ProductUpdate) -> Product:
        db_product = self.get_or_raise(product_id)

        update_data = product_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_product, field, value)

        self.db.commit()
        self.db.refresh(db_product)
        return db_product

    def toggle_active(self, product_id: UUID) -> Product:
        db_product = self.get_or_raise(product_id)
        db_product.active = not db_product.active
        self.db.commit()
        self.db.refresh(db_product)
        logger.info(f"product_active_toggled: {product_id} active={db_product.active}")
        return db_product

    def delete(self, product_id: UUID) -> None:
        db_product = self.get_or_raise(product_id)

        in_use = self.db.query(ReceiptProduct).filter(ReceiptProduct.product_id == product_id).count()
        if in_use:
            raise ProductInUseError(f"Product {product_id} is referenced by {in_use} receipt items")

        self.db.delete(db_product)
        self.db.commit()
        logger.info(f"product_deleted: {product_id}")

    def summary(self) -> dict:
        total = self.db.query(func.count(Product.id)).scalar() or 0
        inactive = self.db.query(func.count(Product.id)).filter(Product.active.is_(False)).scalar() or 0
        return {"total_products": total, "inactive_products": inactive}
