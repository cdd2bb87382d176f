"""
Fixtures compartilhadas: banco SQLite em memória, cliente HTTP e fábricas de dados
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DEV_MODE", "true")
os.environ.setdefault("RATE_LIMIT_PER_IP", "10000/minute")

import pytest
from decimal import Decimal
from uuid import UUID, uuid4
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.dependencies.auth import get_current_user
from app.models.product import Product
from app.models.receipt import Receipt, STATUS_PENDING
from app.models.receipt_product import ReceiptProduct
from app.models.store import Store
from app.models.vendor import Vendor
from app.services import admin_service
from app.utils.dates import today

ADMIN_ID = UUID("00000000-0000-0000-0000-0000000000aa")

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Cria uma sessão de banco de dados para testes"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def no_rate_limit(monkeypatch):
    """Libera o rate limit por usuário (Redis) nos testes de endpoint"""
    async def _allow(key, limit, window_seconds=60):
        return True

    monkeypatch.setattr("app.middleware.rate_limit.check_rate_limit", _allow)


@pytest.fixture
def admin_id(db_session):
    admin_service.add_admin(db_session, ADMIN_ID)
    return ADMIN_ID


@pytest.fixture
def login():
    """Troca o usuário autenticado: login(user_id)"""
    def _login(user_id: UUID):
        app.dependency_overrides[get_current_user] = lambda: user_id
    return _login


@pytest.fixture
def client(db_session, admin_id, login):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    login(admin_id)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_store(db_session):
    def _make(name="Loja Centro", region="Sudeste", address="Rua A, 1", **kwargs):
        store = Store(name=name, region=region, address=address, monthly_revenue=0, **kwargs)
        db_session.add(store)
        db_session.commit()
        return store
    return _make


@pytest.fixture
def make_vendor(db_session, make_store):
    def _make(name="Ana Souza", store=None, cpf_cnpj="52998224725", **kwargs):
        store = store or make_store()
        vendor = Vendor(
            name=name,
            store_id=store.id,
            cpf_cnpj=cpf_cnpj,
            phone=kwargs.pop("phone", "(11) 99999-0000"),
            email=kwargs.pop("email", f"{uuid4().hex[:8]}@example.com"),
            receipts_submitted=kwargs.pop("receipts_submitted", 0),
            receipts_rejected=kwargs.pop("receipts_rejected", 0),
            monthly_sales=kwargs.pop("monthly_sales", Decimal("0")),
            **kwargs,
        )
        db_session.add(vendor)
        db_session.commit()
        return vendor
    return _make


@pytest.fixture
def make_product(db_session):
    def _make(name="Dipirona 500mg", sector="medicamentos", active=True, **kwargs):
        product = Product(name=name, sector=sector, active=active, **kwargs)
        db_session.add(product)
        db_session.commit()
        return product
    return _make


@pytest.fixture
def make_receipt(db_session):
    def _make(
        vendor,
        total_value=Decimal("100.00"),
        status=STATUS_PENDING,
        receipt_date=None,
        number=None,
        items=None,
        created_at=None,
        validated_at=None,
    ):
        """items: lista de (product, quantity, unit_price)"""
        receipt = Receipt(
            receipt_number=number or f"NF-{uuid4().hex[:6]}",
            store_id=vendor.store_id,
            vendor_id=vendor.id,
            total_value=Decimal(total_value),
            receipt_date=receipt_date or today(),
            status=status,
            validated_at=validated_at,
            products_count=len(items or []),
        )
        if created_at is not None:
            receipt.created_at = created_at
        for product, quantity, unit_price in items or []:
            unit_price = Decimal(unit_price)
            receipt.items.append(ReceiptProduct(
                product_id=product.id,
                quantity=quantity,
                unit_price=unit_price,
                total_price=unit_price * quantity,
            ))
        db_session.add(receipt)
        db_session.commit()
        return receipt
    return _make