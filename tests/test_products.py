"""
Testes do catálogo de produtos (/api/v1/products)
"""
import pytest
from uuid import uuid4
from app.models.product import Product

API = "/api/v1/products"


class TestProductCrud:
    def test_create_product_normalizes_sector(self, client):
        response = client.post(API, json={
            "name": "Whey Protein 900g",
            "description": "Suplemento proteico",
            "sector": "Suplementos",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["sector"] == "suplementos"
        assert data["active"] is True

    def test_create_product_invalid_sector(self, client):
        response = client.post(API, json={"name": "Ração", "sector": "alimentos"})
        assert response.status_code == 422

    def test_list_filters(self, client, make_product):
        make_product(name="Dipirona", sector="medicamentos")
        make_product(name="Vermífugo", sector="veterinario")
        make_product(name="Vitamina C", sector="suplementos", active=False)

        by_sector = client.get(API, params={"sector": "veterinario"}).json()
        inactive = client.get(API, params={"active": False}).json()
        by_name = client.get(API, params={"search": "dipi"}).json()

        assert [p["name"] for p in by_sector["products"]] == ["Vermífugo"]
        assert [p["name"] for p in inactive["products"]] == ["Vitamina C"]
        assert by_name["total"] == 1

    def test_toggle_active(self, client, make_product):
        product = make_product()

        first = client.post(f"{API}/{product.id}/toggle-active").json()
        second = client.post(f"{API}/{product.id}/toggle-active").json()

        assert first["active"] is False
        assert second["active"] is True

    def test_update_product(self, client, make_product):
        product = make_product()

        response = client.patch(f"{API}/{product.id}", json={"description": "Analgésico"})

        assert response.status_code == 200
        assert response.json()["description"] == "Analgésico"

    def test_unknown_product(self, client):
        assert client.get(f"{API}/{uuid4()}").status_code == 404
        assert client.post(f"{API}/{uuid4()}/toggle-active").status_code == 404

    def test_delete_product_in_receipts_conflicts(self, client, make_vendor, make_product, make_receipt):
        product = make_product()
        make_receipt(make_vendor(), items=[(product, 1, "10.00")])

        assert client.delete(f"{API}/{product.id}").status_code == 409

    def test_delete_product(self, client, db_session, make_product):
        product = make_product()

        assert client.delete(f"{API}/{product.id}").status_code == 204
        assert db_session.query(Product).count() == 0

    def test_summary(self, client, make_product):
        make_product(name="A")
        make_product(name="B", active=False)

        assert client.get(f"{API}/summary").json() == {"total_products": 2, "inactive_products": 1}


class TestImportProducts:
    def test_import_products(self, client, db_session):
        content = (
            "name,description,sector,image_url\n"
            "Dipirona 500mg,Analgésico,MEDICAMENTOS,\n"
            "Ração Premium,,alimentos,\n"
            ",sem nome,suplementos,\n"
        ).encode("utf-8")

        response = client.post(f"{API}/import", files={"file": ("produtos.csv", content, "text/csv")})

        assert response.status_code == 200
        data = response.json()
        assert data["imported"] == 1
        assert [e["line"] for e in data["errors"]] == [3, 4]
        assert db_session.query(Product).one().sector == "medicamentos"

    def test_import_latin1_file(self, client, db_session):
        content = "name;sector\nVermífugo;veterinario\n".encode("latin-1")

        response = client.post(f"{API}/import", files={"file": ("p.csv", content, "text/csv")})

        assert response.json()["imported"] == 1
        assert db_session.query(Product).one().name == "Vermífugo"

    @pytest.mark.parametrize("content", [b"", b"   \n"])
    def test_import_empty_file(self, client, content):
        response = client.post(f"{API}/import", files={"file": ("p.csv", content, "text/csv")})
        assert response.status_code == 400

    def test_template(self, client):
        response = client.get(f"{API}/import/template")
        assert response.text.strip() == "name,description,sector,image_url"
