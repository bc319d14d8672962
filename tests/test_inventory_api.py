from conftest import auth_header


def create_item(client, headers, payload):
    response = client.post("/api/inventory", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_requires_authentication(client):
    response = client.get("/api/inventory")

    assert response.status_code == 401
    body = response.json()
    assert body["status"] == "Failure"
    assert body["message"]


def test_rejects_garbage_token(client):
    response = client.get("/api/inventory", headers=auth_header("not-a-jwt"))

    assert response.status_code == 401


def test_create_item_derives_value_and_status(client, admin_headers, item_payload, supplier):
    data = create_item(client, admin_headers, item_payload(quantity=4, reorderLevel=10, unitPrice=2.5))

    assert data["sku"] == "DRL-001"
    assert data["totalValue"] == 10.0
    assert data["stockStatus"] == "low-stock"
    assert data["supplierName"] == supplier["name"]
    assert data["updatedByName"] == "Super Admin"


def test_create_wraps_response_in_envelope(client, admin_headers, item_payload):
    response = client.post("/api/inventory", headers=admin_headers, json=item_payload())

    body = response.json()
    assert body["status"] == "Success"
    assert set(body) == {"data", "status", "status_code", "message"}


def test_low_stock_create_opens_alert(client, admin_headers, item_payload):
    item = create_item(client, admin_headers, item_payload(quantity=0))

    alerts = client.get("/api/alerts", headers=admin_headers).json()["data"]["alerts"]
    assert len(alerts) == 1
    assert alerts[0]["type"] == "out-of-stock"
    assert alerts[0]["relatedItemId"] == item["id"]
    assert alerts[0]["relatedItemSku"] == "DRL-001"


def test_duplicate_sku_conflicts_case_insensitively(client, admin_headers, item_payload):
    create_item(client, admin_headers, item_payload(sku="ABC-1"))

    response = client.post("/api/inventory", headers=admin_headers,
                           json=item_payload(sku="  abc-1 ", name="Other"))

    assert response.status_code == 409
    assert response.json()["message"] == "SKU already exists"


def test_update_to_existing_sku_conflicts(client, admin_headers, item_payload):
    create_item(client, admin_headers, item_payload(sku="ONE"))
    second = create_item(client, admin_headers, item_payload(sku="TWO"))

    response = client.put(f"/api/inventory/{second['id']}", headers=admin_headers, json={"sku": "one"})

    assert response.status_code == 409


def test_price_is_accepted_as_unit_price(client, admin_headers, item_payload):
    payload = item_payload()
    del payload["unitPrice"]
    payload["price"] = 12.75

    data = create_item(client, admin_headers, payload)

    assert data["unitPrice"] == 12.75
    assert "price" not in data


def test_validation_errors_list_fields(client, admin_headers, item_payload):
    payload = item_payload(quantity=-1)
    del payload["name"]

    response = client.post("/api/inventory", headers=admin_headers, json=payload)

    assert response.status_code == 400
    body = response.json()
    fields = {e["field"] for e in body["data"]}
    assert {"name", "quantity"} <= fields
    assert all(e["message"] for e in body["data"])


def test_staff_can_create_and_update_quantity(client, staff_headers, item_payload):
    item = create_item(client, staff_headers, item_payload())

    response = client.put(f"/api/inventory/{item['id']}", headers=staff_headers, json={"quantity": 3})

    assert response.status_code == 200
    assert response.json()["data"]["quantity"] == 3
    assert response.json()["data"]["stockStatus"] == "low-stock"


def test_staff_cannot_update_other_fields(client, admin_headers, staff_headers, item_payload):
    item = create_item(client, admin_headers, item_payload())

    response = client.put(f"/api/inventory/{item['id']}", headers=staff_headers,
                          json={"quantity": 3, "name": "Renamed"})

    assert response.status_code == 403
    assert response.json()["message"] == "Staff can only update quantity"
    unchanged = client.get(f"/api/inventory/{item['id']}", headers=admin_headers).json()["data"]
    assert unchanged["quantity"] == 25
    assert unchanged["name"] == "Cordless Drill"


def test_staff_update_with_unknown_fields_is_forbidden(client, admin_headers, staff_headers, item_payload):
    item = create_item(client, admin_headers, item_payload())

    response = client.put(f"/api/inventory/{item['id']}", headers=staff_headers,
                          json={"quantity": 3, "lastUpdated": "2020-01-01", "updatedBy": "x"})

    assert response.status_code == 403
    unchanged = client.get(f"/api/inventory/{item['id']}", headers=admin_headers).json()["data"]
    assert unchanged["quantity"] == 25


def test_admin_update_ignores_unknown_fields(client, admin_headers, item_payload):
    item = create_item(client, admin_headers, item_payload())

    response = client.put(f"/api/inventory/{item['id']}", headers=admin_headers,
                          json={"quantity": 7, "lastUpdated": "2020-01-01"})

    assert response.status_code == 200
    assert response.json()["data"]["quantity"] == 7
    assert "lastUpdated" not in response.json()["data"]


def test_null_for_required_field_is_rejected(client, admin_headers, item_payload):
    item = create_item(client, admin_headers, item_payload())

    response = client.put(f"/api/inventory/{item['id']}", headers=admin_headers,
                          json={"quantity": None})

    assert response.status_code == 400
    assert "quantity" in {e["field"] for e in response.json()["data"]}
    unchanged = client.get(f"/api/inventory/{item['id']}", headers=admin_headers).json()["data"]
    assert unchanged["quantity"] == 25


def test_optional_field_can_be_cleared(client, admin_headers, item_payload):
    item = create_item(client, admin_headers, item_payload())

    response = client.put(f"/api/inventory/{item['id']}", headers=admin_headers,
                          json={"location": None})

    assert response.status_code == 200
    assert response.json()["data"]["location"] is None


def test_boolean_quantity_is_rejected(client, admin_headers, item_payload):
    response = client.post("/api/inventory", headers=admin_headers,
                           json=item_payload(quantity=True))

    assert response.status_code == 400
    assert "quantity" in {e["field"] for e in response.json()["data"]}


def test_invalid_paging_is_rejected(client, admin_headers):
    response = client.get("/api/inventory", headers=admin_headers, params={"limit": 0})

    assert response.status_code == 400
    assert response.json()["status"] == "Failure"
    assert "limit" in {e["field"] for e in response.json()["data"]}

    assert client.get("/api/inventory", headers=admin_headers,
                      params={"page": -1}).status_code == 400


def test_manager_update_changes_fields_and_triggers_alert(client, manager_headers, admin_headers, item_payload):
    item = create_item(client, admin_headers, item_payload())

    response = client.put(f"/api/inventory/{item['id']}", headers=manager_headers,
                          json={"quantity": 0, "location": "B-7"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["location"] == "B-7"
    assert data["stockStatus"] == "out-of-stock"
    stats = client.get("/api/alerts/stats", headers=admin_headers).json()["data"]
    assert stats["critical"] == 1


def test_get_missing_item_is_404(client, admin_headers):
    response = client.get("/api/inventory/00000000-0000-0000-0000-000000000000", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Inventory item not found"


def test_delete_requires_manager(client, admin_headers, staff_headers, manager_headers, item_payload):
    item = create_item(client, admin_headers, item_payload())

    assert client.delete(f"/api/inventory/{item['id']}", headers=staff_headers).status_code == 403
    assert client.delete(f"/api/inventory/{item['id']}", headers=manager_headers).status_code == 200
    assert client.get(f"/api/inventory/{item['id']}", headers=admin_headers).status_code == 404


def test_list_filters_and_pagination(client, admin_headers, item_payload):
    create_item(client, admin_headers, item_payload(sku="A1", name="Alpha bolt", quantity=0))
    create_item(client, admin_headers, item_payload(sku="A2", name="Beta bolt", quantity=5))
    create_item(client, admin_headers, item_payload(sku="A3", name="Gamma nut", quantity=50, category="Parts"))

    low = client.get("/api/inventory", headers=admin_headers,
                     params={"stock_status": "low-stock"}).json()["data"]
    assert [i["sku"] for i in low["inventory"]] == ["A2"]

    bolts = client.get("/api/inventory", headers=admin_headers,
                       params={"search": "bolt", "sort_by": "sku", "sort_order": "asc"}).json()["data"]
    assert [i["sku"] for i in bolts["inventory"]] == ["A1", "A2"]

    parts = client.get("/api/inventory", headers=admin_headers, params={"category": "Parts"}).json()["data"]
    assert [i["sku"] for i in parts["inventory"]] == ["A3"]

    page = client.get("/api/inventory", headers=admin_headers, params={"page": 2, "limit": 2}).json()["data"]
    assert len(page["inventory"]) == 1
    assert page["pagination"] == {"currentPage": 2, "totalPages": 2, "totalItems": 3}


def test_category_lookup(client, admin_headers, item_payload):
    create_item(client, admin_headers, item_payload(sku="C1", category="Tools"))
    create_item(client, admin_headers, item_payload(sku="C2", category="Parts"))

    data = client.get("/api/inventory/category-lookup", headers=admin_headers).json()["data"]

    assert [c["name"] for c in data] == ["Parts", "Tools"]
