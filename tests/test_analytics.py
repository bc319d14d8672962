from datetime import date, datetime, timedelta

from conftest import add_item, add_supplier
from stock_service.app.crud.overview import analytics_crud
from stock_service.app.models.alerts import Alert

TODAY = date(2026, 3, 15)


def test_month_windows_are_continuous_and_oldest_first():
    windows = analytics_crud.month_windows(TODAY)

    assert [w["period"] for w in windows] == [
        "2025-10", "2025-11", "2025-12", "2026-01", "2026-02", "2026-03"]
    assert [w["month"] for w in windows] == ["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"]
    for prev, nxt in zip(windows, windows[1:]):
        assert prev["end"] == nxt["start"]


def test_monthly_trends_zero_fill_gaps(db):
    add_item(db, quantity=5, unit_price=2, updated_at=datetime(2025, 11, 3, 9, 0))
    add_item(db, quantity=7, unit_price=1, updated_at=datetime(2025, 11, 30, 23, 59))
    add_item(db, quantity=4, unit_price=10, updated_at=datetime(2026, 3, 1, 0, 0))
    # outside the window
    add_item(db, quantity=99, unit_price=1, updated_at=datetime(2025, 9, 30, 12, 0))

    trends = analytics_crud.monthly_trends(db, TODAY)

    assert len(trends) == 6
    by_period = {t["period"]: t for t in trends}
    assert by_period["2025-11"]["quantity"] == 12
    assert by_period["2025-11"]["value"] == 17.0
    assert by_period["2026-03"]["value"] == 40.0
    for period in ("2025-10", "2025-12", "2026-01", "2026-02"):
        assert by_period[period]["quantity"] == 0
        assert by_period[period]["value"] == 0


def test_weekly_trends_cover_seven_days_ending_today(db):
    add_item(db, quantity=3, unit_price=1, updated_at=datetime(2026, 3, 15, 8, 0))
    add_item(db, quantity=2, unit_price=1, updated_at=datetime(2026, 3, 9, 8, 0))
    add_item(db, quantity=50, unit_price=1, updated_at=datetime(2026, 3, 8, 23, 0))

    trends = analytics_crud.weekly_trends(db, TODAY)

    assert [t["date"] for t in trends] == [
        (TODAY - timedelta(days=i)).isoformat() for i in range(6, -1, -1)]
    assert trends[0]["quantity"] == 2
    assert trends[-1]["quantity"] == 3
    assert sum(t["quantity"] for t in trends) == 5


def test_inventory_totals(db):
    add_item(db, quantity=0, reorder_level=5, unit_price=3)
    add_item(db, quantity=5, reorder_level=5, unit_price=2)
    add_item(db, quantity=20, reorder_level=5, unit_price=1.5,
             updated_at=datetime(2026, 3, 15, 12, 0))

    totals = analytics_crud.inventory_totals(db, TODAY)

    assert totals["totalItems"] == 3
    assert totals["lowStockItems"] == 2
    assert totals["totalValue"] == 40.0
    assert totals["itemsUpdatedToday"] == 1


def test_category_counts(db):
    add_item(db, category="Tools")
    add_item(db, category="Tools")
    add_item(db, category="Parts")

    assert analytics_crud.category_counts(db) == {"Parts": 1, "Tools": 2}


def test_supplier_ranking_orders_by_item_count_then_creation(db):
    base = datetime(2026, 1, 1)
    a = add_supplier(db, name="A", created_at=base)
    b = add_supplier(db, name="B", created_at=base + timedelta(days=1))
    c = add_supplier(db, name="C", created_at=base + timedelta(days=2))
    add_supplier(db, name="D", created_at=base + timedelta(days=3))
    for supplier, count in ((a, 1), (b, 3), (c, 3)):
        for _ in range(count):
            add_item(db, supplier_id=supplier.id)

    ranked = analytics_crud.top_suppliers(db)

    assert [s["name"] for s in ranked] == ["B", "C", "A", "D"]
    assert [s["itemCount"] for s in ranked] == [3, 3, 1, 0]


def test_supplier_ranking_is_capped(db):
    for i in range(7):
        add_supplier(db, name=f"S{i}")

    assert len(analytics_crud.top_suppliers(db)) == 5


def test_alert_activity_compares_weeks(db):
    now = datetime(2026, 3, 15, 10, 0)
    for days_ago in (0, 1, 6):
        db.add(Alert(type="system", title="t", message="m", created_at=now - timedelta(days=days_ago)))
    db.add(Alert(type="system", title="t", message="m", is_resolved=True,
                 created_at=now - timedelta(days=8)))
    db.commit()

    activity = analytics_crud.alert_activity(db, TODAY)

    assert activity == {"activeAlerts": 3, "alertsChange": 2}


def test_kpis():
    kpis = analytics_crud.build_kpis(
        {"totalItems": 4, "lowStockItems": 1, "totalValue": 100.0},
        {"activeAlerts": 2, "alertsChange": -1},
    )

    assert kpis == {"turnover": 25.0, "accuracy": 75.0, "activeAlerts": 2, "alertsChange": -1}
    assert analytics_crud.build_kpis(
        {"totalItems": 0, "lowStockItems": 0, "totalValue": 0},
        {"activeAlerts": 0, "alertsChange": 0},
    )["accuracy"] == 0


def test_dashboard_endpoint(client, staff_headers, admin_headers, item_payload):
    client.post("/api/inventory", headers=admin_headers, json=item_payload(quantity=2, unitPrice=10))

    response = client.get("/api/analytics", headers=staff_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    stats = data["inventoryStats"]
    assert stats["totalItems"] == 1
    assert stats["lowStockItems"] == 1
    assert stats["totalValue"] == 20.0
    assert stats["itemsUpdatedToday"] == 1
    assert stats["categoryCounts"] == {"Tools": 1}
    assert len(stats["trends"]) == 6
    assert len(stats["weekTrends"]) == 7
    assert stats["weekTrends"][-1]["quantity"] == 2
    assert data["supplierStats"]["totalSuppliers"] == 1
    assert data["supplierStats"]["topSuppliers"][0]["itemCount"] == 1
    assert data["alertStats"]["high"] == 1
    assert data["kpis"]["activeAlerts"] == 1
