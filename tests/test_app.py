def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.get_json()
    assert body["status"] == "ok"
    assert body["environment"] == "test"
    assert body["timezone"]
    assert body["timestamp"]


def test_unknown_route_returns_json(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_cors_allows_frontend_origin(app, client):
    origin = app.config["FRONTEND_URL"]

    response = client.get("/health", headers={"Origin": origin})

    assert response.headers["Access-Control-Allow-Origin"] == origin


def test_products_default_sorted_by_rating(client):
    response = client.get("/api/products")

    assert response.status_code == 200
    body = response.get_json()
    assert body["count"] == 9
    ratings = [product["rating"] for product in body["products"]]
    assert ratings == sorted(ratings, reverse=True)


def test_products_filter_and_sort(client):
    response = client.get("/api/products", query_string={"category": "potatoes", "sort": "price-asc"})

    names = [product["name"] for product in response.get_json()["products"]]
    assert names == ["Early potatoes", "Purple potatoes"]


def test_products_search(client):
    response = client.get("/api/products", query_string={"q": "TOMAT"})

    assert [product["id"] for product in response.get_json()["products"]] == [3]


def test_products_reject_unknown_filters(client):
    response = client.get("/api/products", query_string={"category": "candy"})
    assert response.status_code == 400
    assert "candy" in response.get_json()["error"]

    assert client.get("/api/products", query_string={"sort": "cheapest"}).status_code == 400


def test_product_details(client):
    response = client.get("/api/products/3")
    assert response.status_code == 200
    assert response.get_json()["priceSubscription"] == 74

    response = client.get("/api/products/99")
    assert response.status_code == 404
    assert response.get_json() == {"error": "Product not found"}
