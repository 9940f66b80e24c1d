def _items():
    # totals intentionally differ from price * quantity
    return [
        {"productId": "3", "name": "Cherry tomatoes", "quantity": 2, "price": 74, "total": 100},
        {"productId": 8, "name": "Free-range eggs", "quantity": 1, "price": 79, "total": 50.5},
    ]


def test_create_order_trusts_submitted_totals(client, auth_headers):
    response = client.post("/api/orders", headers=auth_headers, json={
        "items": _items(),
        "deliveryDate": "2026-10-23",
    })

    assert response.status_code == 201
    order = response.get_json()["order"]
    assert order["total"] == 150.5
    assert order["status"] == "pending"
    assert [item["total"] for item in order["items"]] == [100, 50.5]
    assert order["items"][1]["productId"] == "8"


def test_create_order_falls_back_to_profile_address(client, auth_headers):
    order = client.post("/api/orders", headers=auth_headers, json={
        "items": _items(), "deliveryDate": "2026-10-23",
    }).get_json()["order"]
    assert order["address"] == "Vinohradská 12, Praha 2"

    order = client.post("/api/orders", headers=auth_headers, json={
        "items": _items(), "deliveryDate": "2026-10-23", "address": "Korunní 8, Praha 2",
    }).get_json()["order"]
    assert order["address"] == "Korunní 8, Praha 2"


def test_create_order_recomputes_from_catalog_when_enabled(app, client, auth_headers):
    app.config["RECOMPUTE_ORDER_TOTALS"] = True
    items = _items() + [{"productId": "custom-box", "name": "Mystery box", "quantity": 1, "price": 10, "total": 10}]

    order = client.post("/api/orders", headers=auth_headers, json={
        "items": items, "deliveryDate": "2026-10-23",
    }).get_json()["order"]

    # tomatoes 74 * 2, eggs 79 * 1, unknown product kept as submitted
    assert [item["total"] for item in order["items"]] == [148, 79, 10]
    assert order["total"] == 237


def test_create_order_validation(client, auth_headers):
    response = client.post("/api/orders", headers=auth_headers, json={"items": [], "deliveryDate": "2026-10-23"})
    assert response.status_code == 400

    response = client.post("/api/orders", headers=auth_headers, json={
        "items": [{"productId": "1", "name": "Early potatoes", "quantity": 0, "price": 38, "total": 0}],
    })
    assert response.status_code == 400
    fields = {detail["field"] for detail in response.get_json()["details"]}
    assert fields == {"items.0.quantity", "deliveryDate"}


def test_list_orders_newest_first(client, auth_headers):
    first = client.post("/api/orders", headers=auth_headers, json={"items": _items(), "deliveryDate": "2026-10-23"})
    second = client.post("/api/orders", headers=auth_headers, json={"items": _items(), "deliveryDate": "2026-10-30"})

    response = client.get("/api/orders", headers=auth_headers)

    assert response.status_code == 200
    ids = [order["id"] for order in response.get_json()]
    assert ids == [second.get_json()["order"]["id"], first.get_json()["order"]["id"]]
    assert len(response.get_json()[0]["items"]) == 2


def test_get_order_is_owner_only(client, auth_headers, register):
    order_id = client.post("/api/orders", headers=auth_headers, json={
        "items": _items(), "deliveryDate": "2026-10-23",
    }).get_json()["order"]["id"]
    other = {"Authorization": f"Bearer {register(email='petr@example.cz').get_json()['token']}"}

    assert client.get(f"/api/orders/{order_id}", headers=auth_headers).status_code == 200
    response = client.get(f"/api/orders/{order_id}", headers=other)
    assert response.status_code == 404
    assert response.get_json() == {"error": "Order not found"}


def test_orders_require_token(client):
    assert client.get("/api/orders").status_code == 401
    assert client.post("/api/orders", json={"items": _items(), "deliveryDate": "2026-10-23"}).status_code == 401


def test_cancel_pending_order_once(client, auth_headers):
    order_id = client.post("/api/orders", headers=auth_headers, json={
        "items": _items(), "deliveryDate": "2026-10-23",
    }).get_json()["order"]["id"]

    response = client.post(f"/api/orders/{order_id}/cancel", headers=auth_headers)
    assert response.status_code == 200
    assert response.get_json()["order"]["status"] == "cancelled"

    assert client.post(f"/api/orders/{order_id}/cancel", headers=auth_headers).status_code == 409
