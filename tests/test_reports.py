from app.models.product import Product


def generate(client, headers, report_type):
    return client.get(f"/api/manager/generateReport?type={report_type}", headers=headers["manager"])


def test_invalid_report_type(client, headers):
    for report_type in ("", "bogus"):
        response = generate(client, headers, report_type)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid report type. Use: inventory, transactions, or lowStock"


def test_low_stock_report_splits_critical_and_warning(client, headers, make_product):
    make_product(sku="OK-1", stock=50)
    make_product(sku="LOW-1", stock=4)
    make_product(sku="LOW-2", stock=10)
    make_product(sku="OUT-1", stock=0)

    data = generate(client, headers, "lowStock").json()["data"]

    assert data["type"] == "lowStock"
    assert data["summary"] == {"totalLowStockItems": 3, "criticalItems": 1, "warningItems": 2}
    # ascending stock
    assert [p["sku"] for p in data["products"]] == ["OUT-1", "LOW-1", "LOW-2"]
    assert all(p["needsAttention"] for p in data["products"])


def test_inventory_report(client, headers, make_product):
    make_product(name="Bravo", stock=50)
    make_product(name="Alpha", stock=5)
    make_product(name="Charlie", stock=0)

    data = generate(client, headers, "inventory").json()["data"]

    assert [p["name"] for p in data["products"]] == ["Alpha", "Bravo", "Charlie"]
    assert data["summary"] == {
        "totalProducts": 3,
        "totalStock": 55,
        "inStock": 2,
        "outOfStock": 1,
        "lowStock": 1,
    }
    assert data["recentTransactions"] == []


def test_transactions_report_counts_today(client, headers, make_product):
    product = make_product(stock=20)
    client.post("/api/manager/stockIn", json={"productId": product.id, "quantity": 5}, headers=headers["manager"])
    client.post("/api/manager/stockOut", json={"productId": product.id, "quantity": 3}, headers=headers["manager"])
    client.post("/api/manager/stockOut", json={"productId": product.id, "quantity": 2}, headers=headers["manager"])

    data = generate(client, headers, "transactions").json()["data"]

    assert data["summary"] == {
        "totalTransactions": 3,
        "todayTransactions": 3,
        "stockIn": 1,
        "stockOut": 2,
        "totalQuantityIn": 5,
        "totalQuantityOut": 5,
    }
    assert data["transactions"][0]["performedBy"] == "Test Manager"


def test_admin_dashboard(client, db, headers, make_product):
    make_product(stock=3, price=2.5)
    make_product(stock=20, price=1.0)
    flagged = make_product(stock=50, price=0)
    # raw edit leaves the stored status stale; dashboard trusts stored status
    db.query(Product).filter(Product.id == flagged.id).update({"stock": 0}, synchronize_session=False)
    db.commit()

    data = client.get("/api/admin/dashboard", headers=headers["admin"]).json()["data"]

    assert data["totalProducts"] == 3
    assert data["lowStockItems"] == 1
    assert data["activeUsers"] == 4
    assert data["totalValue"] == 27.5


def test_admin_changes_roles(client, users, headers):
    clerk = users["clerk"]
    response = client.put(f"/api/admin/users/{clerk.id}/role", json={"role": "manager"}, headers=headers["admin"])
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "manager"

    response = client.put(f"/api/admin/users/{clerk.id}/role", json={"role": "owner"}, headers=headers["admin"])
    assert response.status_code == 400

    admin = users["admin"]
    response = client.put(f"/api/admin/users/{admin.id}/role", json={"role": "clerk"}, headers=headers["admin"])
    assert response.status_code == 400
    assert response.json()["error"] == "You cannot change your own role"

    response = client.put("/api/admin/users/999/role", json={"role": "clerk"}, headers=headers["admin"])
    assert response.status_code == 404


def test_report_type_defaults_to_inventory(client, headers, make_product):
    make_product(name="Alpha", stock=5)

    response = client.get("/api/manager/generateReport", headers=headers["manager"])

    assert response.status_code == 200
    data = response.json()["data"]
    assert [p["name"] for p in data["products"]] == ["Alpha"]
    assert data["summary"]["totalProducts"] == 1
