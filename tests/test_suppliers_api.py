SUPPLIER = {
    "name": "Northwind Traders",
    "contactPerson": "Ann Lee",
    "email": "Sales@Northwind.com",
    "phone": "555-0111",
    "category": "Electronics",
    "address": {"street": "1 Main St", "city": "Springfield", "zipCode": "12345"},
}


def test_manager_creates_supplier_with_defaults(client, manager_headers):
    response = client.post("/api/suppliers", headers=manager_headers, json=SUPPLIER)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["email"] == "sales@northwind.com"
    assert data["rating"] == 3
    assert data["paymentTerms"] == "NET30"
    assert data["isActive"] is True
    assert data["address"]["zipCode"] == "12345"
    assert data["createdByName"] == "Manager User"


def test_staff_cannot_create_supplier(client, staff_headers):
    response = client.post("/api/suppliers", headers=staff_headers, json=SUPPLIER)

    assert response.status_code == 403


def test_rating_out_of_range_is_rejected(client, admin_headers):
    response = client.post("/api/suppliers", headers=admin_headers, json={**SUPPLIER, "rating": 6})

    assert response.status_code == 400
    assert response.json()["data"][0]["field"] == "rating"


def test_invalid_email_is_rejected(client, admin_headers):
    response = client.post("/api/suppliers", headers=admin_headers, json={**SUPPLIER, "email": "nope"})

    assert response.status_code == 400


def test_list_filters(client, admin_headers):
    client.post("/api/suppliers", headers=admin_headers, json=SUPPLIER)
    client.post("/api/suppliers", headers=admin_headers,
                json={**SUPPLIER, "name": "Globex", "category": "Food", "isActive": False})

    data = client.get("/api/suppliers", headers=admin_headers).json()["data"]
    assert data["totalSuppliers"] == 2
    assert data["pagination"]["totalItems"] == 2

    active = client.get("/api/suppliers", headers=admin_headers, params={"active": "true"}).json()["data"]
    assert [s["name"] for s in active["suppliers"]] == ["Northwind Traders"]

    food = client.get("/api/suppliers", headers=admin_headers, params={"category": "Food"}).json()["data"]
    assert [s["name"] for s in food["suppliers"]] == ["Globex"]

    lookup = client.get("/api/suppliers/supplier-lookup", headers=admin_headers).json()["data"]
    assert [s["name"] for s in lookup] == ["Northwind Traders"]


def test_update_supplier(client, manager_headers):
    created = client.post("/api/suppliers", headers=manager_headers, json=SUPPLIER).json()["data"]

    response = client.put(f"/api/suppliers/{created['id']}", headers=manager_headers,
                          json={"rating": 5, "paymentTerms": "COD"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["rating"] == 5
    assert data["paymentTerms"] == "COD"
    assert data["name"] == "Northwind Traders"


def test_update_rejects_null_required_field(client, manager_headers):
    created = client.post("/api/suppliers", headers=manager_headers, json=SUPPLIER).json()["data"]

    response = client.put(f"/api/suppliers/{created['id']}", headers=manager_headers,
                          json={"email": None, "notes": None})

    assert response.status_code == 400
    assert {e["field"] for e in response.json()["data"]} == {"email"}


def test_payment_terms_lookup(client, staff_headers):
    data = client.get("/api/suppliers/payment-terms-lookup", headers=staff_headers).json()["data"]

    assert [t["id"] for t in data] == ["NET15", "NET30", "NET45", "NET60", "COD"]


def test_delete_is_admin_only_and_leaves_items(client, admin_headers, manager_headers, item_payload, supplier):
    item = client.post("/api/inventory", headers=admin_headers, json=item_payload()).json()["data"]

    assert client.delete(f"/api/suppliers/{supplier['id']}", headers=manager_headers).status_code == 403
    assert client.delete(f"/api/suppliers/{supplier['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/api/suppliers/{supplier['id']}", headers=admin_headers).status_code == 404

    orphan = client.get(f"/api/inventory/{item['id']}", headers=admin_headers).json()["data"]
    assert orphan["supplierId"] == supplier["id"]
    assert orphan["supplierName"] is None
