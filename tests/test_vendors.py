"""
Testes de vendedores: filtro por loja, ordenação, paginação, cadastro e importação
"""
import pytest
from decimal import Decimal
from uuid import uuid4
from app.models.vendor import Vendor

API = "/api/v1/vendors"


@pytest.fixture
def stores(make_store):
    return {
        "centro": make_store(name="Drogaria Centro", region="Sudeste"),
        "norte": make_store(name="Farmácia Norte", region="Norte"),
    }


class TestListVendors:
    def test_filter_by_store_name(self, client, stores, make_vendor):
        make_vendor(name="Ana", store=stores["centro"])
        make_vendor(name="Bruno", store=stores["norte"])
        make_vendor(name="Carla", store=stores["centro"])

        data = client.get(API, params={"store": "Drogaria Centro"}).json()

        assert data["total"] == 2
        assert {v["store"] for v in data["vendors"]} == {"Drogaria Centro"}
        assert sorted(v["name"] for v in data["vendors"]) == ["Ana", "Carla"]

    def test_all_returns_every_vendor_and_store_names(self, client, stores, make_vendor):
        make_vendor(name="Ana", store=stores["centro"])
        make_vendor(name="Bruno", store=stores["norte"])

        data = client.get(API, params={"store": "all"}).json()

        assert data["total"] == 2
        assert data["stores"] == ["Drogaria Centro", "Farmácia Norte"]

    def test_sort_by_name_case_insensitive(self, client, stores, make_vendor):
        for name in ["carla", "Ana", "bruno"]:
            make_vendor(name=name, store=stores["centro"])

        asc = client.get(API, params={"sort": "name", "direction": "asc"}).json()
        desc = client.get(API, params={"sort": "name", "direction": "desc"}).json()

        assert [v["name"] for v in asc["vendors"]] == ["Ana", "bruno", "carla"]
        assert [v["name"] for v in desc["vendors"]] == ["carla", "bruno", "Ana"]

    def test_sort_by_monthly_sales_desc(self, client, stores, make_vendor):
        make_vendor(name="Ana", store=stores["centro"], monthly_sales=Decimal("10.00"))
        make_vendor(name="Bruno", store=stores["centro"], monthly_sales=Decimal("300.00"))
        make_vendor(name="Carla", store=stores["centro"], monthly_sales=Decimal("45.00"))

        data = client.get(API, params={"sort": "monthly_sales", "direction": "desc"}).json()

        assert [v["name"] for v in data["vendors"]] == ["Bruno", "Carla", "Ana"]

    def test_sort_by_store(self, client, stores, make_vendor):
        make_vendor(name="Bruno", store=stores["norte"])
        make_vendor(name="Ana", store=stores["centro"])

        data = client.get(API, params={"sort": "store"}).json()

        assert [v["store"] for v in data["vendors"]] == ["Drogaria Centro", "Farmácia Norte"]

    def test_invalid_sort_field(self, client):
        assert client.get(API, params={"sort": "cpf_cnpj"}).status_code == 422

    def test_pagination_ten_per_page(self, client, stores, make_vendor):
        for i in range(12):
            make_vendor(name=f"Vendedor {i:02d}", store=stores["centro"])

        first = client.get(API, params={"sort": "name"}).json()
        second = client.get(API, params={"sort": "name", "page": 2}).json()

        assert first["total"] == 12
        assert first["total_pages"] == 2
        assert first["per_page"] == 10
        assert len(first["vendors"]) == 10
        assert [v["name"] for v in second["vendors"]] == ["Vendedor 10", "Vendedor 11"]

    def test_empty_list(self, client):
        data = client.get(API).json()
        assert data["vendors"] == []
        assert data["total_pages"] == 0

    def test_summary(self, client, stores, make_vendor):
        make_vendor(store=stores["centro"], receipts_rejected=2, monthly_sales=Decimal("100.00"))
        make_vendor(store=stores["norte"], receipts_rejected=1, monthly_sales=Decimal("50.00"))

        data = client.get(f"{API}/summary").json()

        assert data["total_vendors"] == 2
        assert data["total_rejected"] == 3
        assert Decimal(data["total_sales"]) == Decimal("150.00")


class TestVendorCrud:
    def _payload(self, store_id, **overrides):
        payload = {
            "name": "Diego Alves",
            "cpf_cnpj": "529.982.247-25",
            "phone": "(11) 98888-7777",
            "email": "diego@example.com",
            "store_id": str(store_id),
        }
        payload.update(overrides)
        return payload

    def test_create_normalizes_document(self, client, db_session, stores):
        response = client.post(API, json=self._payload(stores["centro"].id))

        assert response.status_code == 201
        data = response.json()
        assert data["cpf_cnpj"] == "52998224725"
        assert data["store"] == "Drogaria Centro"
        assert data["receipts_submitted"] == 0
        assert db_session.query(Vendor).count() == 1

    def test_create_with_cnpj(self, client, stores):
        response = client.post(API, json=self._payload(stores["centro"].id, cpf_cnpj="11.222.333/0001-81"))
        assert response.status_code == 201
        assert response.json()["cpf_cnpj"] == "11222333000181"

    @pytest.mark.parametrize("document", ["529.982.247-26", "111.111.111-11", "1234567890123"])
    def test_create_invalid_document(self, client, stores, document):
        response = client.post(API, json=self._payload(stores["centro"].id, cpf_cnpj=document))
        assert response.status_code == 422

    def test_create_requires_all_fields(self, client, stores):
        payload = self._payload(stores["centro"].id)
        del payload["phone"]
        assert client.post(API, json=payload).status_code == 422

    def test_create_invalid_email(self, client, stores):
        response = client.post(API, json=self._payload(stores["centro"].id, email="nao-e-email"))
        assert response.status_code == 422

    def test_create_unknown_store(self, client):
        response = client.post(API, json=self._payload(uuid4()))
        assert response.status_code == 422
        assert response.json()["detail"] == "Loja informada não existe"

    def test_update_moves_vendor_to_other_store(self, client, stores, make_vendor):
        vendor = make_vendor(store=stores["centro"])

        response = client.patch(f"{API}/{vendor.id}", json={"store_id": str(stores["norte"].id)})

        assert response.status_code == 200
        assert response.json()["store"] == "Farmácia Norte"

    @pytest.mark.parametrize("payload", [
        {"name": None},
        {"name": "   "},
        {"store_id": None},
    ])
    def test_update_rejects_empty_required_fields(self, client, db_session, stores, make_vendor, payload):
        vendor = make_vendor(name="Ana Souza", store=stores["centro"])

        response = client.patch(f"{API}/{vendor.id}", json=payload)

        assert response.status_code == 422
        db_session.refresh(vendor)
        assert vendor.name == "Ana Souza"
        assert vendor.store_id == stores["centro"].id

    def test_update_trims_name(self, client, make_vendor):
        vendor = make_vendor()

        response = client.patch(f"{API}/{vendor.id}", json={"name": "  Ana Lima "})

        assert response.status_code == 200
        assert response.json()["name"] == "Ana Lima"

    def test_get_unknown_vendor(self, client):
        assert client.get(f"{API}/{uuid4()}").status_code == 404

    def test_delete_vendor_with_receipts_conflicts(self, client, make_vendor, make_receipt):
        vendor = make_vendor()
        make_receipt(vendor)

        assert client.delete(f"{API}/{vendor.id}").status_code == 409

    def test_delete_vendor(self, client, db_session, make_vendor):
        vendor = make_vendor()

        assert client.delete(f"{API}/{vendor.id}").status_code == 204
        assert db_session.query(Vendor).count() == 0


class TestImportVendors:
    def test_template(self, client):
        response = client.get(f"{API}/import/template")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.strip() == "name,cpf_cnpj,phone,email,store"

    def test_import_reports_invalid_lines(self, client, db_session, stores):
        content = (
            "name;cpf_cnpj;phone;email;store\n"
            "Carla Dias;529.982.247-25;(11) 90000-0000;carla@example.com;drogaria centro\n"
            "Sem Documento;123;(11) 90000-0001;sem@example.com;Drogaria Centro\n"
            "Dan Rocha;11222333000181;(11) 90000-0002;dan@example.com;Loja Inexistente\n"
            ";;;;\n"
        ).encode("utf-8")

        response = client.post(
            f"{API}/import",
            files={"file": ("vendedores.csv", content, "text/csv")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["imported"] == 1
        assert [e["line"] for e in data["errors"]] == [3, 4]
        vendor = db_session.query(Vendor).one()
        assert vendor.name == "Carla Dias"
        assert vendor.store_id == stores["centro"].id

    def test_import_missing_columns(self, client):
        content = b"name,email\nAna,ana@example.com\n"

        response = client.post(f"{API}/import", files={"file": ("v.csv", content, "text/csv")})

        assert response.status_code == 400
        assert "cpf_cnpj" in response.json()["detail"]
