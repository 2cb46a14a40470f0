import logging

from sqlalchemy.exc import IntegrityError

from storefront.extensions import db
from storefront.exceptions import NotFoundError
from storefront.models.cart import Cart, CartItem
from storefront.models.product import Product

logger = logging.getLogger(__name__)


class CartService:
    @staticmethod
    def get_cart(user_id: str):
        return Cart.query.filter_by(user_id=user_id).first()

    @staticmethod
    def get_or_create_cart(user_id: str) -> Cart:
        cart = CartService.get_cart(user_id)
        if cart:
            return cart

        try:
            cart = Cart(user_id=user_id)
            db.session.add(cart)
            db.session.commit()
        except IntegrityError:
            # another request created the cart first
            db.session.rollback()
            cart = CartService.get_cart(user_id)
        return cart

    @staticmethod
    def _available_product(product_id: str) -> Product:
        product = db.session.get(Product, product_id)
        if not product or not product.is_available:
            raise NotFoundError("Product not found or unavailable")
        return product

    @staticmethod
    def _check_stock(product: Product, quantity: int):
        if not product.has_stock(quantity):
            raise ValueError(f"Only {product.stock} items available in stock")

    @staticmethod
    def add_item(user_id: str, product_id: str, quantity: int = 1) -> CartItem:
        """Add product to the user's cart, incrementing the line if it already exists"""
        product = CartService._available_product(product_id)
        CartService._check_stock(product, quantity)

        cart = CartService.get_or_create_cart(user_id)

        item = CartItem.query.filter_by(cart_id=cart.id, product_id=product.id).first()
        if item is None:
            try:
                item = CartItem(cart_id=cart.id, product_id=product.id, quantity=quantity)
                db.session.add(item)
                db.session.commit()
                return item
            except IntegrityError:
                db.session.rollback()
                logger.info("Cart line for product %s inserted concurrently, incrementing", product.id)
                item = CartItem.query.filter_by(cart_id=cart.id, product_id=product.id).one()

        new_quantity = item.quantity + quantity
        CartService._check_stock(product, new_quantity)
        item.quantity = new_quantity
        db.session.commit()
        return item

    @staticmethod
    def _owned_item(user_id: str, item_id: str) -> CartItem:
        item = db.session.get(CartItem, item_id)
        if not item or item.cart.user_id != user_id:
            raise NotFoundError("Cart item not found")
        return item

    @staticmethod
    def update_item(user_id: str, item_id: str, quantity: int) -> CartItem:
        item = CartService._owned_item(user_id, item_id)
        CartService._check_stock(item.product, quantity)

        item.quantity = quantity
        db.session.commit()
        return item

    @staticmethod
    def remove_item(user_id: str, item_id: str):
        item = CartService._owned_item(user_id, item_id)
        db.session.delete(item)
        db.session.commit()

    @staticmethod
    def count_items(user_id: str) -> int:
        cart = CartService.get_cart(user_id)
        return cart.item_count if cart else 0
