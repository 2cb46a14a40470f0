import pytest
from decimal import Decimal
from storefront import create_app, db
from storefront.config import TestingConfig
from storefront.enums import UserRole
from storefront.models.user import User
from storefront.models.category import ProductCategory
from storefront.models.product import Product, ProductImage


@pytest.fixture(scope="function")
def app(tmp_path):
    """Create application for testing"""
    app = create_app(TestingConfig)
    app.config["UPLOAD_FOLDER"] = str(tmp_path / "uploads")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Test client"""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Test CLI runner"""
    return app.test_cli_runner()


# User fixtures
@pytest.fixture
def customer_user(app):
    """Create a customer with a saved shipping address"""
    user = User(
        email="customer@test.com",
        name="Test Customer",
        role=UserRole.CUSTOMER,
        phone_number="9800000001",
        region="Bagmati",
        city="Kathmandu",
        street="Thamel Marg 12",
        is_active=True,
    )
    user.set_password("password123")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def other_customer(app):
    """Second customer, without an address"""
    user = User(email="other@test.com", name="Other Customer", role=UserRole.CUSTOMER)
    user.set_password("password123")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin_user(app):
    """Create an admin user"""
    user = User(
        email="admin@test.com",
        name="Test Admin",
        role=UserRole.ADMIN,
        is_active=True,
    )
    user.set_password("password123")
    db.session.add(user)
    db.session.commit()
    return user


def _login(client, email):
    response = client.post(
        "/api/auth/login", json={"email": email, "password": "password123"}
    )
    assert response.status_code == 200, f"Login failed: {response.json}"
    return response.json["access_token"]


# Auth token fixtures
@pytest.fixture
def customer_token(client, customer_user):
    """Get customer authentication token"""
    return _login(client, "customer@test.com")


@pytest.fixture
def other_token(client, other_customer):
    return _login(client, "other@test.com")


@pytest.fixture
def admin_token(client, admin_user):
    """Get admin authentication token"""
    return _login(client, "admin@test.com")


@pytest.fixture
def customer_headers(customer_token):
    """Customer authentication headers"""
    return {"Authorization": f"Bearer {customer_token}"}


@pytest.fixture
def other_headers(other_token):
    return {"Authorization": f"Bearer {other_token}"}


@pytest.fixture
def admin_headers(admin_token):
    """Admin authentication headers"""
    return {"Authorization": f"Bearer {admin_token}"}


# Data fixtures
@pytest.fixture
def category(app):
    """Create a test category"""
    category = ProductCategory(
        name="Pottery", slug="pottery", description="Hand-thrown ceramics"
    )
    db.session.add(category)
    db.session.commit()
    return category


@pytest.fixture
def product(app, category):
    """Create a test product"""
    product = Product(
        category_id=category.id,
        name="Clay Tea Cup",
        slug="clay-tea-cup",
        description="Wood-fired tea cup",
        price=Decimal("1500.00"),
        compare_at_price=Decimal("1800.00"),
        stock=10,
        is_active=True,
    )
    product.images.append(ProductImage(url="/uploads/cup.jpg", alt="Clay Tea Cup image 1", position=0))
    db.session.add(product)
    db.session.commit()
    return product


@pytest.fixture
def second_product(app, category):
    product = Product(
        category_id=category.id,
        name="Woven Basket",
        slug="woven-basket",
        description="Bamboo basket",
        price=Decimal("750.50"),
        stock=3,
        is_active=True,
    )
    db.session.add(product)
    db.session.commit()
    return product


@pytest.fixture
def cart_item(app, customer_user, product):
    """Two cups in the customer's cart"""
    from storefront.services.cart_service import CartService

    return CartService.add_item(customer_user.id, product.id, 2)
