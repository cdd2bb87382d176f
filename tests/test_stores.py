"""
Testes de lojas (/api/v1/stores)
"""
import pytest
from decimal import Decimal
from uuid import uuid4
from sqlalchemy.exc import IntegrityError
from app.models.store import Store
from app.schemas.store import StoreUpdate
from app.services.store_service import StoreService

API = "/api/v1/stores"


def test_create_store_starts_with_zero_revenue(client, db_session):
    response = client.post(API, json={
        "name": "  Drogaria Centro ",
        "region": "Sudeste",
        "address": "Av. Paulista, 1000",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Drogaria Centro"
    assert Decimal(data["monthly_revenue"]) == Decimal("0")
    assert db_session.query(Store).count() == 1


def test_create_store_requires_region(client):
    response = client.post(API, json={"name": "Loja", "region": "   ", "address": "Rua A"})
    assert response.status_code == 422


def test_list_stores_in_creation_order(client, make_store):
    make_store(name="Primeira")
    make_store(name="Segunda")

    data = client.get(API).json()

    assert [s["name"] for s in data] == ["Primeira", "Segunda"]


def test_update_store_settings(client, make_store):
    store = make_store()

    response = client.patch(f"{API}/{store.id}", json={"phone": "(11) 3333-4444", "region": "Sul"})

    assert response.status_code == 200
    data = response.json()
    assert data["phone"] == "(11) 3333-4444"
    assert data["region"] == "Sul"
    assert data["name"] == store.name


def test_update_unknown_store(client):
    assert client.patch(f"{API}/{uuid4()}", json={"phone": "123"}).status_code == 404


@pytest.mark.parametrize("payload", [
    {"name": None},
    {"region": None},
    {"address": "   "},
    {"name": "  "},
])
def test_update_rejects_empty_required_fields(client, db_session, make_store, payload):
    store = make_store(name="Loja Centro")

    response = client.patch(f"{API}/{store.id}", json=payload)

    assert response.status_code == 422
    db_session.refresh(store)
    assert store.name == "Loja Centro"
    assert store.region == "Sudeste"
    assert store.address == "Rua A, 1"


def test_update_trims_text_fields(client, make_store):
    store = make_store()

    response = client.patch(f"{API}/{store.id}", json={"name": "  Loja Nova  "})

    assert response.status_code == 200
    assert response.json()["name"] == "Loja Nova"


def test_failed_update_rolls_back_session(db_session, make_store):
    store = make_store(name="Loja Centro")
    service = StoreService(db_session)

    with pytest.raises(IntegrityError):
        service.update(store.id, StoreUpdate.model_construct(name=None))

    db_session.refresh(store)
    assert store.name == "Loja Centro"
    assert db_session.query(Store).count() == 1


def test_delete_store_in_use(client, make_vendor):
    vendor = make_vendor()
    response = client.delete(f"{API}/{vendor.store_id}")
    assert response.status_code == 409


def test_delete_store(client, db_session, make_store):
    store = make_store()

    assert client.delete(f"{API}/{store.id}").status_code == 204
    assert db_session.query(Store).count() == 0
    assert client.get(f"{API}/{store.id}").status_code == 404
