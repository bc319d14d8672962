import pytest


@pytest.fixture
def stocked(client, admin_headers, item_payload):
    client.post("/api/inventory", headers=admin_headers, json=item_payload(sku="R1", quantity=0))
    client.post("/api/inventory", headers=admin_headers,
                json=item_payload(sku="R2", quantity=30, category="Parts", unitPrice=4))


def test_analytics_export_defaults_to_csv(client, manager_headers, stocked):
    response = client.get("/api/analytics/export", headers=manager_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "analytics-export.csv" in response.headers["content-disposition"]
    body = response.text
    assert body.startswith("Analytics Export")
    assert "Total Items,2" in body
    assert "Parts,1" in body


def test_analytics_export_formats(client, admin_headers, stocked):
    pdf = client.post("/api/analytics/export", headers=admin_headers, json={"format": "pdf"})
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.content.startswith(b"%PDF")

    xlsx = client.get("/api/analytics/export", headers=admin_headers, params={"format": "xlsx"})
    assert xlsx.status_code == 200
    assert xlsx.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    # xlsx files are zip archives
    assert xlsx.content[:2] == b"PK"


def test_analytics_export_is_forbidden_for_staff(client, staff_headers):
    assert client.get("/api/analytics/export", headers=staff_headers).status_code == 403


def test_report_defaults_to_pdf(client, admin_headers, stocked):
    response = client.post("/api/reports/generate", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="report.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_report_csv_sections(client, admin_headers, stocked):
    response = client.post("/api/reports/generate", headers=admin_headers,
                           json={"format": "csv", "startDate": "2020-01-01"})

    assert response.status_code == 200
    body = response.text
    for heading in ("INVENTORY SUMMARY", "CATEGORY BREAKDOWN", "SUPPLIER PERFORMANCE",
                    "USERS BY ROLE", "ALERTS (PERIOD)"):
        assert heading in body
    assert "outOfStockItems,1" in body
    assert "totalValue,120.0" in body
    assert "Acme Supplies,2,120.00" in body
    assert "out-of-stock,1,0" in body


def test_report_rejects_inverted_range(client, admin_headers):
    response = client.post("/api/reports/generate", headers=admin_headers,
                           json={"startDate": "2026-02-01", "endDate": "2026-01-01"})

    assert response.status_code == 400


def test_reports_are_admin_only(client, manager_headers):
    assert client.post("/api/reports/generate", headers=manager_headers).status_code == 403


def test_json_export_rows(client, manager_headers, stocked):
    response = client.get("/api/export", headers=manager_headers, params={"type": "inventory"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["filename"].startswith("inventory_export_")
    skus = sorted(row["SKU"] for row in data["data"])
    assert skus == ["R1", "R2"]
    assert set(data["data"][0]) >= {"SKU", "Stock Status", "Supplier"}


def test_json_export_unknown_type(client, manager_headers):
    response = client.get("/api/export", headers=manager_headers, params={"type": "planets"})

    assert response.status_code == 400
