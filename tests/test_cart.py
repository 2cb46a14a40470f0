from datetime import timedelta

from flask_jwt_extended import create_access_token

from storefront.extensions import db
from storefront.models.cart import Cart, CartItem


class TestCartRead:
    def test_get_cart_creates_empty_cart(self, client, customer_user, customer_headers):
        response = client.get("/api/cart", headers=customer_headers)

        assert response.status_code == 200
        assert response.json["items"] == []
        assert response.json["subtotal"] == "0.00"
        assert response.json["item_count"] == 0
        assert Cart.query.filter_by(user_id=customer_user.id).count() == 1

    def test_get_cart_with_items(self, client, customer_headers, cart_item):
        response = client.get("/api/cart", headers=customer_headers)

        assert response.status_code == 200
        line = response.json["items"][0]
        assert line["quantity"] == 2
        assert line["product"]["name"] == "Clay Tea Cup"
        assert line["product"]["image"] == "/uploads/cup.jpg"
        assert line["product"]["category"]["name"] == "Pottery"
        assert response.json["subtotal"] == "3000.00"
        assert response.json["total"] == "3000.00"
        assert response.json["item_count"] == 2

    def test_get_cart_requires_login(self, client):
        response = client.get("/api/cart")

        assert response.status_code == 401


class TestCartAdd:
    def test_add_item(self, client, customer_headers, product):
        response = client.post(
            "/api/cart", json={"product_id": product.id, "quantity": 3}, headers=customer_headers
        )

        assert response.status_code == 200
        assert response.json["item"]["quantity"] == 3

    def test_add_defaults_to_one(self, client, customer_headers, product):
        response = client.post("/api/cart", json={"product_id": product.id}, headers=customer_headers)

        assert response.status_code == 200
        assert response.json["item"]["quantity"] == 1

    def test_add_same_product_increments(self, client, customer_headers, product):
        client.post("/api/cart", json={"product_id": product.id, "quantity": 2}, headers=customer_headers)
        response = client.post(
            "/api/cart", json={"product_id": product.id, "quantity": 3}, headers=customer_headers
        )

        assert response.status_code == 200
        assert response.json["item"]["quantity"] == 5
        assert CartItem.query.count() == 1

    def test_add_more_than_stock(self, client, customer_headers, product):
        response = client.post(
            "/api/cart", json={"product_id": product.id, "quantity": 11}, headers=customer_headers
        )

        assert response.status_code == 400
        assert "Only 10 items available in stock" in response.json["error"]

    def test_increment_past_stock(self, client, customer_headers, cart_item, product):
        response = client.post(
            "/api/cart", json={"product_id": product.id, "quantity": 9}, headers=customer_headers
        )

        assert response.status_code == 400
        assert CartItem.query.one().quantity == 2

    def test_add_inactive_product(self, client, customer_headers, product):
        product.is_active = False
        db.session.commit()

        response = client.post("/api/cart", json={"product_id": product.id}, headers=customer_headers)

        assert response.status_code == 404

    def test_add_unknown_product(self, client, customer_headers):
        response = client.post("/api/cart", json={"product_id": "nope"}, headers=customer_headers)

        assert response.status_code == 404

    def test_add_zero_quantity(self, client, customer_headers, product):
        response = client.post(
            "/api/cart", json={"product_id": product.id, "quantity": 0}, headers=customer_headers
        )

        assert response.status_code == 400
        assert "quantity" in response.json["messages"]


class TestCartUpdate:
    def test_update_quantity(self, client, customer_headers, cart_item):
        response = client.patch(
            f"/api/cart/{cart_item.id}", json={"quantity": 4}, headers=customer_headers
        )

        assert response.status_code == 200
        assert response.json["item"]["quantity"] == 4

    def test_update_over_stock(self, client, customer_headers, cart_item):
        response = client.patch(
            f"/api/cart/{cart_item.id}", json={"quantity": 50}, headers=customer_headers
        )

        assert response.status_code == 400

    def test_update_other_users_item(self, client, other_headers, cart_item):
        response = client.patch(
            f"/api/cart/{cart_item.id}", json={"quantity": 1}, headers=other_headers
        )

        assert response.status_code == 404

    def test_remove_item(self, client, customer_headers, cart_item):
        response = client.delete(f"/api/cart/{cart_item.id}", headers=customer_headers)

        assert response.status_code == 200
        assert CartItem.query.count() == 0

    def test_remove_other_users_item(self, client, other_headers, cart_item):
        response = client.delete(f"/api/cart/{cart_item.id}", headers=other_headers)

        assert response.status_code == 404
        assert CartItem.query.count() == 1


class TestCartCount:
    def test_count_anonymous(self, client):
        response = client.get("/api/cart/count")

        assert response.status_code == 200
        assert response.json == {"count": 0}

    def test_count_sums_quantities(self, client, customer_user, customer_headers, cart_item, second_product):
        from storefront.services.cart_service import CartService

        CartService.add_item(customer_user.id, second_product.id, 1)

        response = client.get("/api/cart/count", headers=customer_headers)

        assert response.json == {"count": 3}

    def test_count_with_expired_token(self, client, customer_user, cart_item):
        token = create_access_token(identity=customer_user.id, expires_delta=timedelta(seconds=-10))

        response = client.get("/api/cart/count", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json == {"count": 0}

    def test_count_with_malformed_token(self, client):
        response = client.get("/api/cart/count", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 200
        assert response.json == {"count": 0}
