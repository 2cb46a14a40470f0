from .user import User
from .category import ProductCategory
from .product import Product, ProductImage
from .cart import Cart, CartItem
from .order import Order, OrderItem

__all__ = [
    "User",
    "ProductCategory",
    "Product",
    "ProductImage",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
]
