import logging

from flask import current_app

from storefront.extensions import db
from storefront.enums import OrderStatus, PaymentStatus
from storefront.exceptions import NotFoundError
from storefront.models.cart import CartItem
from storefront.models.order import Order
from storefront.models.product import Product
from storefront.models.user import User
from storefront.services.cart_service import CartService
from storefront.utils.order_utils import (
    _get_products_for_update,
    _validate_items,
    _compute_totals,
    _shipping_address_snapshot,
    _create_order,
    _create_order_items,
)

logger = logging.getLogger(__name__)

ALLOWED_STATUS_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: {OrderStatus.REFUNDED},
    OrderStatus.REFUNDED: set(),
}

ALLOWED_PAYMENT_TRANSITIONS = {
    PaymentStatus.UNPAID: {PaymentStatus.PAID},
    PaymentStatus.PAID: {PaymentStatus.REFUNDED},
    PaymentStatus.REFUNDED: set(),
}


class OrderService:
    @staticmethod
    def create_order_from_cart(user: User, cart_item_ids) -> Order:
        """Turn the selected lines of the user's cart into an order in one transaction"""
        cart = CartService.get_cart(user.id)
        cart_items = []
        if cart:
            cart_items = (
                CartItem.query.filter(CartItem.cart_id == cart.id, CartItem.id.in_(set(cart_item_ids)))
                .order_by(CartItem.created_at.asc())
                .all()
            )
        if not cart_items:
            raise ValueError("No matching cart items found for this user")

        if not user.has_complete_address():
            raise ValueError("Shipping address is incomplete")

        config = current_app.config
        try:
            products_map = _get_products_for_update({item.product_id for item in cart_items})
            validated_items, subtotal = _validate_items(cart_items, products_map)

            totals = _compute_totals(subtotal, config["SHIPPING_FLAT_RATE"], config["TAX_RATE"])
            shipping_address = _shipping_address_snapshot(user, config["SHIPPING_COUNTRY"])

            order = _create_order(user.id, totals, shipping_address)
            _create_order_items(order, validated_items)

            for item in cart_items:
                db.session.delete(item)

            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(
            "Created order %s for user %s with %d items, total %s",
            order.order_number, user.id, len(cart_items), order.total_amount,
        )
        return order

    @staticmethod
    def get_order_by_id(order_id: str, user_id: str = None) -> Order:
        order = db.session.get(Order, order_id)
        if not order:
            raise NotFoundError("Order not found")

        # Access control
        if user_id is not None and order.user_id != user_id:
            raise NotFoundError("Order not found")

        return order

    @staticmethod
    def get_orders(user_id: str = None, status: str = None, page: int = 1, per_page: int = 20,):
        query = Order.query

        if user_id:
            query = query.filter_by(user_id=user_id)

        if status:
            try:
                query = query.filter_by(status=OrderStatus(status))
            except ValueError:
                raise ValueError(f"Unknown order status: {status}") from None

        return query.order_by(Order.created_at.desc()).paginate(
            page=page, per_page=per_page, error_out=False
        )

    @staticmethod
    def _restore_stock(order: Order):
        items = order.items.all()
        products = (
            db.session.query(Product)
            .filter(Product.id.in_({item.product_id for item in items}))
            .order_by(Product.id.asc())
            .with_for_update()
            .all()
        )
        products_map = {p.id: p for p in products}
        for item in items:
            products_map[item.product_id].add_stock(item.quantity)

    @staticmethod
    def update_order(order_id: str, status: OrderStatus = None, payment_status: PaymentStatus = None) -> Order:
        """Admin status change; cancelling returns the reserved stock"""
        try:
            order = Order.query.filter_by(id=order_id).with_for_update().first()
            if not order:
                raise NotFoundError("Order not found")

            if status and status != order.status:
                if status not in ALLOWED_STATUS_TRANSITIONS[order.status]:
                    raise ValueError(f"Cannot transition from {order.status.value} to {status.value}")
                if status == OrderStatus.CANCELLED:
                    OrderService._restore_stock(order)
                order.status = status

            if payment_status and payment_status != order.payment_status:
                if payment_status not in ALLOWED_PAYMENT_TRANSITIONS[order.payment_status]:
                    raise ValueError(
                        f"Cannot change payment from {order.payment_status.value} to {payment_status.value}"
                    )
                order.payment_status = payment_status

            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info("Order %s is now %s / %s", order.order_number, order.status.value, order.payment_status.value)
        return order

    @staticmethod
    def mark_paid(order: Order, payment_reference: str) -> Order:
        order.payment_status = PaymentStatus.PAID
        order.payment_reference = payment_reference
        db.session.commit()
        logger.info("Order %s paid, reference %s", order.order_number, payment_reference)
        return order
