def test_get_product_by_id(client):
    resp = client.get("/api/products/1")

    assert resp.status_code == 200
    body = resp.json()
    assert body["data"]["name"] == "Mechanical Keyboard"
    assert body["data"]["imageUrls"] == ["/images/electronics.jpg"]
    assert body["message"] == "Product fetched successfully"


def test_get_missing_product_is_404(client):
    resp = client.get("/api/products/999")

    assert resp.status_code == 404
    assert resp.json() == {"message": "Product not found."}


def test_blank_product_id_is_400(client):
    resp = client.get("/api/products/%20")

    assert resp.status_code == 400
    assert resp.json()["message"] == "Product ID is required."


def test_list_products(client):
    resp = client.get("/api/products")

    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 5
    assert len(body["data"]) == 5
    assert body["message"] == "Products fetched successfully"


def test_list_products_with_filters_sort_and_paging(client):
    resp = client.get(
        "/api/products",
        params={"category": "Electronics", "sortBy": "price", "sortOrder": "desc", "skip": 1, "take": 1},
    )

    body = resp.json()
    assert resp.status_code == 200
    assert body["count"] == 3
    assert [p["id"] for p in body["data"]] == ["1"]


def test_list_products_search_and_price(client):
    resp = client.get("/api/products", params={"search": "mouse", "minPrice": 10, "maxPrice": 50})

    body = resp.json()
    assert body["count"] == 1
    assert body["data"][0]["name"] == "Wireless Mouse"


def test_malformed_pagination_is_not_an_error(client):
    resp = client.get("/api/products", params={"skip": -10, "take": -3})
    assert resp.status_code == 200
    assert resp.json()["data"] == []

    resp = client.get("/api/products", params={"take": 100000})
    assert resp.status_code == 200
    assert len(resp.json()["data"]) == 5


def test_invalid_sort_field_is_400(client):
    resp = client.get("/api/products", params={"sortBy": "stock"})

    assert resp.status_code == 400
    assert "message" in resp.json()


def test_root_and_health(client):
    assert client.get("/").text == "NovaCart Backend API is running..."

    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["database"] == "ok"
