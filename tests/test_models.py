import pytest
from decimal import Decimal

from storefront.enums import UserRole
from storefront.extensions import db
from storefront.models.category import ProductCategory
from storefront.models.user import User


class TestUserModel:
    """Test User model"""

    def test_set_password(self, app):
        """Test password hashing"""
        user = User(email="test@test.com", name="Test", role=UserRole.CUSTOMER)
        user.set_password("password123")

        assert user.password_hash != "password123"
        assert user.check_password("password123")
        assert not user.check_password("wrongpassword")

    def test_has_role(self, app, customer_user, admin_user):
        assert customer_user.has_role(UserRole.CUSTOMER)
        assert not customer_user.has_role(UserRole.ADMIN)
        assert admin_user.has_role(UserRole.ADMIN)

    def test_to_dict_excludes_password(self, app, customer_user):
        """Test to_dict excludes sensitive data"""
        data = customer_user.to_dict()
        assert "password_hash" not in data
        assert data["role"] == "customer"
        assert data["email"] == "customer@test.com"

    def test_address_completeness(self, app, customer_user, other_customer):
        assert customer_user.has_complete_address()
        assert not other_customer.has_complete_address()
        assert other_customer.address_dict()["city"] == ""

    def test_name_alone_is_not_an_address(self, app, other_customer):
        assert other_customer.name
        assert not other_customer.has_any_address()

        other_customer.city = "Pokhara"
        assert other_customer.has_any_address()
        assert not other_customer.has_complete_address()


class TestProductModel:
    def test_stock_helpers(self, app, product):
        assert product.has_stock(10)
        assert not product.has_stock(11)

        product.deduct_stock(4)
        assert product.stock == 6

        product.add_stock(1)
        assert product.stock == 7

    def test_deduct_more_than_stock(self, app, product):
        with pytest.raises(ValueError, match="Insufficient stock"):
            product.deduct_stock(11)
        assert product.stock == 10

    def test_soft_delete_hides_product(self, app, product):
        assert product.is_available

        product.soft_delete()

        assert product.is_deleted
        assert not product.is_available

        product.restore()
        assert product.is_available

    def test_to_dict(self, app, product):
        data = product.to_dict()

        assert data["price"] == "1500.00"
        assert data["category"] == {"id": product.category_id, "name": "Pottery"}
        assert data["images"][0]["url"] == "/uploads/cup.jpg"
        assert "deleted_at" not in data

    def test_summary_uses_first_image(self, app, product, second_product):
        assert product.summary()["image"] == "/uploads/cup.jpg"
        assert second_product.summary()["image"] is None
        assert second_product.summary()["compare_at_price"] is None


class TestCategoryModel:
    def test_children_are_nested(self, app, category):
        db.session.add_all([
            ProductCategory(name="Vases", slug="vases", parent_id=category.id),
            ProductCategory(name="Mugs", slug="mugs", parent_id=category.id),
            ProductCategory(name="Hidden", slug="hidden", parent_id=category.id, is_active=False),
        ])
        db.session.commit()

        data = category.to_dict(include_children=True)

        assert [c["name"] for c in data["children"]] == ["Mugs", "Vases"]
        assert "children" not in category.to_dict()


class TestCartModel:
    def test_totals(self, app, customer_user, cart_item, second_product):
        from storefront.services.cart_service import CartService

        CartService.add_item(customer_user.id, second_product.id, 1)
        cart = cart_item.cart

        assert cart.subtotal == Decimal("3750.50")
        assert cart.item_count == 3
        assert cart.to_dict()["total"] == "3750.50"
        assert cart_item.line_total == Decimal("3000.00")
