"""API tests: routes, status codes and error mapping."""

from decimal import Decimal

API = "/api/v1"


def _create_material(client, material_id, **fields):
    body = {"id": material_id, "name": material_id, "unit": "g", "unit_cost": "1",
            "current_stock": "0", "min_stock": "0", "target_stock": "0"}
    body.update(fields)
    response = client.post(f"{API}/materials", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def _create_latte(client):
    _create_material(client, "m-beans", unit_cost="3", current_stock="100", min_stock="20", target_stock="200")
    _create_material(client, "m-milk", unit="ml", unit_cost="4", current_stock="50", min_stock="10",
                     target_stock="100")
    response = client.post(f"{API}/products", json={
        "id": "p-latte", "name": "Latte", "price": "50",
        "recipe": [{"material_id": "m-beans", "quantity": "2"}, {"material_id": "m-milk", "quantity": "1"}],
    })
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data


class TestMaterialsApi:

    def test_create_and_list(self, client):
        _create_material(client, "m1", current_stock="10")
        response = client.get(f"{API}/materials")
        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == ["m1"]

    def test_duplicate_id_is_409(self, client):
        _create_material(client, "m1")
        response = client.post(f"{API}/materials", json={"id": "m1", "name": "again"})
        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]

    def test_invalid_unit_is_422(self, client):
        response = client.post(f"{API}/materials", json={"name": "x", "unit": "bucket"})
        assert response.status_code == 422

    def test_deduct_and_adjust(self, client):
        _create_material(client, "m1", current_stock="10")

        assert client.post(f"{API}/materials/m1/deduct", json={"quantity": "7"}).status_code == 204
        response = client.post(f"{API}/materials/m1/adjust", json={"delta": "-5"})
        assert response.status_code == 200
        assert Decimal(response.json()["current_stock"]) == Decimal("0")

    def test_deduct_rejects_non_positive_quantity(self, client):
        _create_material(client, "m1", current_stock="10")

        assert client.post(f"{API}/materials/m1/deduct", json={"quantity": "-5"}).status_code == 422
        assert client.post(f"{API}/materials/m1/deduct", json={"quantity": "0"}).status_code == 422
        assert client.post(f"{API}/materials/m1/deduct", json={"quantity": "0.00001"}).status_code == 422
        stock = client.get(f"{API}/materials").json()[0]["current_stock"]
        assert Decimal(stock) == Decimal("10")

    def test_manual_deduct_is_recorded_as_adjustment(self, client):
        _create_material(client, "m1", current_stock="10")

        assert client.post(f"{API}/materials/m1/deduct", json={"quantity": "2.5"}).status_code == 204

        movements = client.get(f"{API}/materials/movements", params={"material_id": "m1"}).json()
        assert movements[0]["reason"] == "adjustment"
        assert movements[0]["ref_type"] == "manual"
        assert Decimal(movements[0]["stock_after"]) == Decimal("7.5")

    def test_deduct_unknown_is_silent(self, client):
        assert client.post(f"{API}/materials/nope/deduct", json={"quantity": "1"}).status_code == 204

    def test_adjust_unknown_is_404(self, client):
        response = client.post(f"{API}/materials/nope/adjust", json={"delta": "1"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Material 'nope' not found"

    def test_movements(self, client):
        _create_material(client, "m1", current_stock="10")
        client.post(f"{API}/materials/m1/adjust", json={"delta": "5", "notes": "delivery"})
        response = client.get(f"{API}/materials/movements", params={"material_id": "m1"})
        assert response.status_code == 200
        assert response.json()[0]["notes"] == "delivery"

    def test_update(self, client):
        _create_material(client, "m1", unit_cost="1")
        response = client.put(f"{API}/materials/m1", json={"unit_cost": "2.5"})
        assert response.status_code == 200
        assert Decimal(response.json()["unit_cost"]) == Decimal("2.5")


class TestProductsApi:

    def test_create_derives_cost_and_profit(self, client):
        product = _create_latte(client)
        assert Decimal(product["cost"]) == Decimal("10")
        assert Decimal(product["profit"]) == Decimal("40")
        assert len(product["recipe"]) == 2

    def test_resolve(self, client):
        _create_latte(client)
        response = client.post(f"{API}/products/p-latte/resolve", params={"units": 3})
        assert response.status_code == 200
        assert [(c["material_id"], Decimal(c["quantity"])) for c in response.json()] == [
            ("m-beans", Decimal("6")),
            ("m-milk", Decimal("3")),
        ]

    def test_unknown_product_is_404(self, client):
        assert client.get(f"{API}/products/nope").status_code == 404


class TestSalesApi:

    def test_post_sale_deducts_stock(self, client):
        _create_latte(client)
        response = client.post(f"{API}/sales", json={
            "items": [{"product_id": "p-latte", "quantity": 2}],
            "payment_method": "card",
            "timestamp": "2024-03-04T10:00:00Z",
        })
        assert response.status_code == 201, response.text
        sale = response.json()
        assert Decimal(sale["subtotal"]) == Decimal("100")
        assert sale["date"] == "2024-03-04"

        materials = {m["id"]: Decimal(m["current_stock"]) for m in client.get(f"{API}/materials").json()}
        assert materials == {"m-beans": Decimal("96"), "m-milk": Decimal("48")}

        listed = client.get(f"{API}/sales", params={"date": "2024-03-04"}).json()
        assert [s["id"] for s in listed] == [sale["id"]]
        assert client.get(f"{API}/sales/{sale['id']}").status_code == 200

    def test_empty_cart_is_422(self, client):
        assert client.post(f"{API}/sales", json={"items": []}).status_code == 422

    def test_unknown_product_is_404(self, client):
        response = client.post(f"{API}/sales", json={"items": [{"product_id": "nope", "quantity": 1}]})
        assert response.status_code == 404


class TestWasteAndSuggestionsApi:

    def test_waste_then_suggestion(self, client):
        _create_material(client, "m1", unit_cost="2", current_stock="10", min_stock="5", target_stock="20")
        response = client.post(f"{API}/waste", json={
            "material_id": "m1", "quantity": "7", "reason": "Spoiled",
            "reported_by": "Mona", "reported_by_id": "u1",
        })
        assert response.status_code == 201, response.text
        assert Decimal(response.json()["total_loss"]) == Decimal("14")

        suggestions = client.get(f"{API}/purchase-suggestions").json()
        assert len(suggestions) == 1
        assert Decimal(suggestions[0]["needed_quantity"]) == Decimal("17")
        assert Decimal(suggestions[0]["estimated_cost"]) == Decimal("34")

        ranking = client.get(f"{API}/waste/most-wasted").json()
        assert ranking[0]["material_id"] == "m1"

    def test_waste_over_stock_is_400(self, client):
        _create_material(client, "m1", current_stock="1")
        response = client.post(f"{API}/waste", json={
            "material_id": "m1", "quantity": "2", "reason": "Spoiled",
            "reported_by": "Mona", "reported_by_id": "u1",
        })
        assert response.status_code == 400


class TestStaffApi:

    def test_users_and_attendance(self, client):
        response = client.post(f"{API}/users", json={"username": "mona", "full_name": "Mona"})
        assert response.status_code == 201
        user = response.json()
        assert user["role"] == "cashier"

        assert client.post(f"{API}/attendance/checkin",
                           json={"user_id": user["id"], "user_name": "Mona"}).status_code == 201
        response = client.post(f"{API}/attendance/checkout", json={"user_id": user["id"]})
        assert response.status_code == 200
        assert response.json()["work_hours"] is not None

        records = client.get(f"{API}/attendance", params={"user_id": user["id"]}).json()
        assert len(records) == 1

    def test_checkout_without_checkin_is_404(self, client):
        assert client.post(f"{API}/attendance/checkout", json={"user_id": "ghost"}).status_code == 404

    def test_settings_roundtrip(self, client):
        assert client.get(f"{API}/settings").json()["currency"] == "EGP"
        response = client.put(f"{API}/settings", json={"store_name": "Corner Cafe"})
        assert response.json()["store_name"] == "Corner Cafe"
        assert client.put(f"{API}/settings", json={"work_start_time": "25:00"}).status_code == 422


class TestReportsAndAdminApi:

    def test_dashboard_and_summary(self, client):
        _create_latte(client)
        client.post(f"{API}/sales", json={
            "items": [{"product_id": "p-latte", "quantity": 1}],
            "cashier_id": "c1",
            "timestamp": "2024-03-04T10:00:00Z",
        })

        dashboard = client.get(f"{API}/reports/dashboard", params={"date": "2024-03-04"}).json()
        assert dashboard["today_orders"] == 1

        summary = client.get(f"{API}/reports/summary", params={"start": "2024-03-01", "end": "2024-03-31"})
        assert summary.status_code == 200
        assert Decimal(summary.json()["profit"]) == Decimal("40")

        shift = client.get(f"{API}/reports/shift", params={"cashier_id": "c1", "date": "2024-03-04"}).json()
        assert shift["orders"] == 1

    def test_summary_rejects_inverted_range(self, client):
        response = client.get(f"{API}/reports/summary", params={"start": "2024-03-31", "end": "2024-03-01"})
        assert response.status_code == 400

    def test_clear_data(self, client):
        _create_latte(client)
        client.post(f"{API}/sales", json={"items": [{"product_id": "p-latte", "quantity": 1}]})

        response = client.post(f"{API}/admin/clear-data")
        assert response.status_code == 200
        assert response.json()["deleted"]["sales"] == 1
        assert client.get(f"{API}/sales").json() == []
