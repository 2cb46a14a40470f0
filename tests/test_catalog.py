from decimal import Decimal

from storefront.extensions import db
from storefront.models.category import ProductCategory
from storefront.models.product import Product


class TestPublicProducts:
    """Test public product browsing"""

    def test_list_products_without_login(self, client, product):
        response = client.get("/api/products")

        assert response.status_code == 200
        assert len(response.json["products"]) == 1
        assert response.json["products"][0]["name"] == "Clay Tea Cup"
        assert response.json["products"][0]["price"] == "1500.00"
        assert response.json["categories"] == [{"id": product.category_id, "name": "Pottery"}]

    def test_list_hides_inactive_and_deleted(self, client, product, second_product):
        second_product.is_active = False
        product.soft_delete()

        response = client.get("/api/products")

        assert response.status_code == 200
        assert response.json["products"] == []
        assert response.json["total"] == 0
        assert response.json["pages"] == 1

    def test_search_matches_name_case_insensitive(self, client, product, second_product):
        response = client.get("/api/products?search=CLAY")

        assert response.status_code == 200
        assert [p["slug"] for p in response.json["products"]] == ["clay-tea-cup"]

    def test_search_matches_description(self, client, product, second_product):
        response = client.get("/api/products?search=bamboo")

        assert [p["slug"] for p in response.json["products"]] == ["woven-basket"]

    def test_filter_by_category(self, client, product):
        other = ProductCategory(name="Textiles", slug="textiles")
        db.session.add(other)
        db.session.commit()

        response = client.get(f"/api/products?category_id={product.category_id}")
        assert len(response.json["products"]) == 1

        response = client.get(f"/api/products?category_id={other.id}")
        assert len(response.json["products"]) == 0

    def test_filter_by_price_range(self, client, product, second_product):
        response = client.get("/api/products?min_price=1000&max_price=2000")

        assert [p["slug"] for p in response.json["products"]] == ["clay-tea-cup"]

    def test_invalid_price_range(self, client, product):
        response = client.get("/api/products?min_price=2000&max_price=1000")

        assert response.status_code == 400

    def test_malformed_price_is_ignored(self, client, product):
        response = client.get("/api/products?min_price=abc&max_price=-5")

        assert response.status_code == 200
        assert len(response.json["products"]) == 1

    def test_pagination(self, client, category):
        for i in range(15):
            db.session.add(Product(
                category_id=category.id, name=f"Bowl {i}", slug=f"bowl-{i}",
                price=Decimal("100.00"), stock=1,
            ))
        db.session.commit()

        response = client.get("/api/products")
        assert response.json["per_page"] == 12
        assert len(response.json["products"]) == 12
        assert response.json["pages"] == 2

        response = client.get("/api/products?page=2&per_page=1000")
        assert response.json["per_page"] == 48
        assert len(response.json["products"]) == 0

    def test_get_product_by_id_and_slug(self, client, product):
        by_id = client.get(f"/api/products/{product.id}")
        by_slug = client.get("/api/products/clay-tea-cup")

        assert by_id.status_code == 200
        assert by_slug.status_code == 200
        assert by_id.json["product"]["id"] == by_slug.json["product"]["id"]
        assert by_id.json["product"]["images"][0]["url"] == "/uploads/cup.jpg"

    def test_get_inactive_product(self, client, product):
        product.is_active = False
        db.session.commit()

        response = client.get(f"/api/products/{product.id}")

        assert response.status_code == 404

    def test_get_product_not_found(self, client):
        response = client.get("/api/products/missing")

        assert response.status_code == 404


class TestPublicCategories:
    def test_flat_list(self, client, category):
        inactive = ProductCategory(name="Hidden", slug="hidden", is_active=False)
        db.session.add(inactive)
        db.session.commit()

        response = client.get("/api/categories")

        assert response.status_code == 200
        assert [c["slug"] for c in response.json["categories"]] == ["pottery"]

    def test_tree(self, client, category):
        child = ProductCategory(name="Mugs", slug="mugs", parent_id=category.id)
        db.session.add(child)
        db.session.commit()

        response = client.get("/api/categories?tree=1")

        roots = response.json["categories"]
        assert [c["slug"] for c in roots] == ["pottery"]
        assert [c["slug"] for c in roots[0]["children"]] == ["mugs"]
