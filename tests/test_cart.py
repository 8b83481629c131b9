import pytest

from novacart.data.models import CartItemModel, CartModel
from novacart.domain.errors import NotFoundError, ValidationError
from novacart.services.cart_service import CartService

from conftest import register


def lines(cart):
    return {item["productId"]: item["quantity"] for item in cart["items"]}


def test_get_cart_creates_empty_cart(client, auth_headers, db_session):
    resp = client.get("/api/cart", headers=auth_headers)

    assert resp.status_code == 200
    cart = resp.json()
    assert cart["items"] == []
    assert cart["total"] == 0
    assert db_session.query(CartModel).count() == 1

    #second read reuses the same cart
    assert client.get("/api/cart", headers=auth_headers).json()["id"] == cart["id"]
    assert db_session.query(CartModel).count() == 1


def test_add_item_is_materialized(client, auth_headers):
    resp = client.post("/api/cart", json={"productId": "1", "quantity": 2}, headers=auth_headers)

    assert resp.status_code == 200
    cart = resp.json()
    [line] = cart["items"]
    assert line["productId"] == "1"
    assert line["quantity"] == 2
    assert line["product"]["kind"] == "product"
    assert line["product"]["name"] == "Mechanical Keyboard"
    assert cart["total"] == pytest.approx(399.98)


def test_add_same_product_accumulates(client, auth_headers):
    client.post("/api/cart", json={"productId": "2", "quantity": 1}, headers=auth_headers)
    resp = client.post("/api/cart", json={"productId": "2", "quantity": 2}, headers=auth_headers)

    cart = resp.json()
    assert len(cart["items"]) == 1
    assert lines(cart) == {"2": 3}


def test_add_defaults_to_one_and_accepts_numeric_ids(client, auth_headers):
    resp = client.post("/api/cart", json={"productId": 3}, headers=auth_headers)
    assert lines(resp.json()) == {"3": 1}


@pytest.mark.parametrize("body", [{"quantity": 1}, {"productId": "1", "quantity": 0}, {"productId": "1", "quantity": -2}])
def test_add_invalid_body_is_400(client, auth_headers, body):
    resp = client.post("/api/cart", json=body, headers=auth_headers)
    assert resp.status_code == 400


def test_update_overwrites_quantity(client, auth_headers):
    client.post("/api/cart", json={"productId": "1", "quantity": 5}, headers=auth_headers)
    resp = client.put("/api/cart", json={"productId": "1", "quantity": 2}, headers=auth_headers)

    assert resp.status_code == 200
    assert lines(resp.json()) == {"1": 2}


@pytest.mark.parametrize("quantity", [0, -1])
def test_update_to_zero_or_less_removes_line(client, auth_headers, db_session, quantity):
    client.post("/api/cart", json={"productId": "1"}, headers=auth_headers)
    client.post("/api/cart", json={"productId": "4"}, headers=auth_headers)

    resp = client.put("/api/cart", json={"productId": "1", "quantity": quantity}, headers=auth_headers)

    assert lines(resp.json()) == {"4": 1}
    assert lines(client.get("/api/cart", headers=auth_headers).json()) == {"4": 1}
    assert db_session.query(CartItemModel).filter_by(product_id="1").count() == 0


def test_update_without_cart_is_404(client, auth_headers):
    resp = client.put("/api/cart", json={"productId": "1", "quantity": 2}, headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json() == {"message": "Cart not found"}


def test_remove_item(client, auth_headers):
    client.post("/api/cart", json={"productId": "1"}, headers=auth_headers)
    client.post("/api/cart", json={"productId": "2"}, headers=auth_headers)

    resp = client.delete("/api/cart/1", headers=auth_headers)
    assert resp.status_code == 200
    assert lines(resp.json()) == {"2": 1}

    #absent line is not an error
    resp = client.delete("/api/cart/1", headers=auth_headers)
    assert resp.status_code == 200
    assert lines(resp.json()) == {"2": 1}


def test_remove_without_cart_is_404(client, auth_headers):
    resp = client.delete("/api/cart/1", headers=auth_headers)
    assert resp.status_code == 404


def test_unknown_product_renders_as_placeholder(client, auth_headers):
    resp = client.post("/api/cart", json={"productId": "gone", "quantity": 2}, headers=auth_headers)

    assert resp.status_code == 200
    [line] = resp.json()["items"]
    assert line["product"] == {"kind": "unknown", "id": "gone", "name": "Unknown Product", "price": 0.0, "imageUrls": []}
    assert resp.json()["total"] == 0


def test_carts_are_per_user(client, auth_headers):
    other = register(client, email="ewa@example.com", name="Ewa")["token"]
    other_headers = {"Authorization": f"Bearer {other}"}

    client.post("/api/cart", json={"productId": "1"}, headers=auth_headers)

    assert client.get("/api/cart", headers=other_headers).json()["items"] == []


def test_service_increment_is_atomic_update(db_session, catalog):
    svc = CartService(db_session, catalog)

    svc.add_item(7, "1", 1)
    svc.get_cart(7)
    cart = svc.add_item(7, "1", 2)

    assert [(i["product_id"], i["quantity"]) for i in cart["items"]] == [("1", 3)]
    assert db_session.query(CartItemModel).count() == 1


def test_service_validation(db_session, catalog):
    svc = CartService(db_session, catalog)

    with pytest.raises(ValidationError):
        svc.add_item(7, "1", 0)
    with pytest.raises(NotFoundError):
        svc.remove_item(7, "1")
    with pytest.raises(NotFoundError):
        svc.update_item(7, "1", 3)
