"""
Testes do dashboard: cards, regiões, curva ABC e painel de pendentes
"""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from app.models.receipt import STATUS_APPROVED, STATUS_REJECTED
from app.services.dashboard_service import classify_abc, get_region_performance

API = "/api/v1/dashboard"


class TestClassifyAbc:
    def test_pareto_classes(self):
        revenues = [Decimal(v) for v in ("700", "200", "60", "40")]
        assert classify_abc(revenues) == ["A", "A", "B", "C"]

    def test_single_product_is_a(self):
        assert classify_abc([Decimal("10")]) == ["A"]

    def test_zero_revenue(self):
        assert classify_abc([Decimal("0"), Decimal("0")]) == ["C", "C"]

    def test_empty(self):
        assert classify_abc([]) == []


class TestDashboardStats:
    def test_month_cards_with_variation(self, client, make_vendor, make_receipt):
        vendor = make_vendor()
        make_receipt(vendor, total_value="100.00", status=STATUS_APPROVED, receipt_date=date(2026, 3, 5))
        make_receipt(vendor, total_value="300.00", status=STATUS_APPROVED, receipt_date=date(2026, 3, 20))
        make_receipt(vendor, total_value="200.00", status=STATUS_APPROVED, receipt_date=date(2026, 2, 14))
        make_receipt(vendor, total_value="999.00", status=STATUS_REJECTED, receipt_date=date(2026, 3, 6))
        make_receipt(vendor, total_value="50.00")

        response = client.get(f"{API}/stats", params={"year": 2026, "month": 3})

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total_sales"]["value"]) == 2
        assert data["total_sales"]["variation_percent"] == 100.0
        assert Decimal(data["total_value"]["value"]) == Decimal("400.00")
        assert data["total_value"]["variation_percent"] == 100.0
        assert Decimal(data["average_ticket"]["value"]) == Decimal("200.00")
        assert data["average_ticket"]["variation_percent"] == 0.0
        assert data["pending_validations"] == 1

    def test_no_previous_month_has_no_variation(self, client, make_vendor, make_receipt):
        vendor = make_vendor()
        make_receipt(vendor, total_value="80.00", status=STATUS_APPROVED, receipt_date=date(2026, 1, 10))

        data = client.get(f"{API}/stats", params={"year": 2026, "month": 1}).json()

        assert data["total_sales"]["variation_percent"] is None
        assert Decimal(data["average_ticket"]["value"]) == Decimal("80.00")

    def test_year_and_month_go_together(self, client):
        assert client.get(f"{API}/stats", params={"year": 2026}).status_code == 400


class TestRegionPerformance:
    def test_last_days_approved_only(self, db_session, make_store, make_vendor, make_receipt):
        reference = date(2026, 5, 31)
        sudeste = make_vendor(store=make_store(name="Loja SP", region="Sudeste"))
        sul = make_vendor(store=make_store(name="Loja PR", region="Sul"))
        make_receipt(sudeste, total_value="100.00", status=STATUS_APPROVED, receipt_date=reference)
        make_receipt(sudeste, total_value="50.00", status=STATUS_APPROVED, receipt_date=reference - timedelta(days=29))
        make_receipt(sudeste, total_value="900.00", status=STATUS_APPROVED, receipt_date=reference - timedelta(days=30))
        make_receipt(sul, total_value="500.00", status=STATUS_APPROVED, receipt_date=reference - timedelta(days=3))
        make_receipt(sul, total_value="70.00", receipt_date=reference)

        regions = get_region_performance(db_session, days=30, reference=reference)

        assert [r["region"] for r in regions] == ["Sul", "Sudeste"]
        assert regions[0]["sales"] == 1
        assert regions[1]["sales"] == 2
        assert regions[1]["revenue"] == Decimal("150.00")

    def test_endpoint(self, client, make_vendor, make_receipt):
        make_receipt(make_vendor(), status=STATUS_APPROVED)

        data = client.get(f"{API}/regions").json()

        assert len(data) == 1
        assert data[0]["region"] == "Sudeste"


class TestProductPerformance:
    def test_abc_from_approved_items(self, client, make_vendor, make_product, make_receipt):
        vendor = make_vendor()
        products = [make_product(name=n) for n in ("P1", "P2", "P3", "P4")]
        make_receipt(vendor, status=STATUS_APPROVED, items=[
            (products[0], 7, "100.00"),
            (products[1], 2, "100.00"),
        ])
        make_receipt(vendor, status=STATUS_APPROVED, items=[
            (products[2], 3, "20.00"),
            (products[3], 4, "10.00"),
        ])
        make_receipt(vendor, items=[(products[3], 100, "10.00")])

        data = client.get(f"{API}/products").json()

        assert [(p["name"], p["category"]) for p in data] == [
            ("P1", "A"), ("P2", "A"), ("P3", "B"), ("P4", "C"),
        ]
        assert data[0]["quantity"] == 7
        assert Decimal(data[0]["revenue"]) == Decimal("700.00")

        only_c = client.get(f"{API}/products", params={"category": "C"}).json()
        assert [p["name"] for p in only_c] == ["P4"]

    def test_invalid_category(self, client):
        assert client.get(f"{API}/products", params={"category": "D"}).status_code == 422


class TestPendingPanel:
    def test_oldest_pending_first(self, client, make_vendor, make_receipt):
        vendor = make_vendor()
        now = datetime.now(timezone.utc)
        recent = make_receipt(vendor, created_at=now - timedelta(minutes=5))
        oldest = make_receipt(vendor, created_at=now - timedelta(hours=3))
        make_receipt(vendor, status=STATUS_APPROVED, created_at=now - timedelta(days=1))

        data = client.get(f"{API}/pending", params={"limit": 5}).json()

        assert [r["id"] for r in data] == [str(oldest.id), str(recent.id)]
        assert data[0]["waiting_minutes"] >= 179
