from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging
from app.models.store import Store
from app.models.vendor import Vendor
from app.models.receipt import Receipt
from app.schemas.store import StoreCreate, StoreUpdate

logger = logging.getLogger(__name__)


class StoreNotFoundError(Exception):
    pass


class StoreInUseError(Exception):
    """Loja ainda referenciada por vendedores ou notas"""
    pass


class StoreService:
    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Store]:
        """Retorna todas as lojas na ordem de cadastro"""
        return self.db.query(Store).order_by(Store.created_at.asc(), Store.name.asc()).all()

    def get_by_id(self, store_id: UUID) -> Optional[Store]:
        return self.db.query(Store).filter(Store.id == store_id).first()

    def get_or_raise(self, store_id: UUID) -> Store:
        store = self.get_by_id(store_id)
        if not store:
            raise StoreNotFoundError(f"Store not found: {store_id}")
        return store

    def create(self, store_data: StoreCreate) -> Store:
        """Cria uma loja com faturamento mensal zerado"""
        db_store = Store(**store_data.model_dump(), monthly_revenue=0)
        self.db.add(db_store)
        self.db.commit()
        self.db.refresh(db_store)
        logger.info(f"store_created: {db_store.id} ({db_store.name})")
        return db_store

    def update(self, store_id: UUID, store_data: StoreUpdate) -> Store:
        db_store = self.get_or_raise(store_id)

        update_data = store_data.model_dump(exclude_unset=True)
        try:
            for field, value in update_data.items():
                setattr(db_store, field, value.strip() if isinstance(value, str) else value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(db_store)
        logger.info(f"store_updated: {store_id} fields={list(update_data)}")
        return db_store

    def delete(self, store_id: UUID) -> None:
        db_store = self.get_or_raise(store_id)

        vendors = self.db.query(Vendor).filter(Vendor.store_id == store_id).count()
        receipts = self.db.query(Receipt).filter(Receipt.store_id == store_id).count()
        if vendors or receipts:
            raise StoreInUseError(
                f"Store {store_id} has {vendors} vendors and {receipts} receipts"
            )

        self.db.delete(db_store)
        self.db.commit()
        logger.info(f"store_deleted: {store_id}")
