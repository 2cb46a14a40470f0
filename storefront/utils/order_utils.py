from decimal import Decimal, ROUND_HALF_UP

from storefront.extensions import db
from storefront.models.product import Product
from storefront.models.order import Order, OrderItem
from storefront.utils.helpers import generate_order_number

CENT = Decimal("0.01")


def _get_products_for_update(product_ids):
    products = (
        db.session.query(Product)
        .filter(Product.id.in_(product_ids))
        .order_by(Product.id.asc())
        .with_for_update()
        .all()
    )
    return {p.id: p for p in products}


def _validate_items(cart_items, products_map):
    subtotal = Decimal("0")
    validated_items = []

    for item in cart_items:
        product = products_map.get(item.product_id)
        qty = item.quantity

        if not product or not product.is_available:
            name = product.name if product else "Product"
            raise ValueError(f"{name} is no longer available")
        if not product.has_stock(qty):
            raise ValueError(f"Insufficient stock for {product.name}")

        line_total = product.price * qty
        subtotal += line_total
        validated_items.append((product, qty, line_total))

    return validated_items, subtotal


def _compute_totals(subtotal, shipping_flat_rate, tax_rate):
    shipping_total = Decimal(shipping_flat_rate).quantize(CENT)
    tax_total = (subtotal * Decimal(tax_rate)).quantize(CENT, rounding=ROUND_HALF_UP)
    total_amount = subtotal + shipping_total + tax_total
    return subtotal.quantize(CENT), shipping_total, tax_total, total_amount.quantize(CENT)


def _shipping_address_snapshot(user, country):
    address = user.address_dict()
    address["country"] = country
    return address


def _create_order(user_id, totals, shipping_address):
    subtotal, shipping_total, tax_total, total_amount = totals
    order = Order(
        order_number=generate_order_number(),
        user_id=user_id,
        subtotal=subtotal,
        shipping_total=shipping_total,
        tax_total=tax_total,
        total_amount=total_amount,
        shipping_address=shipping_address,
        # billing is the shipping address for now
        billing_address=dict(shipping_address),
    )
    db.session.add(order)
    db.session.flush()
    return order


def _create_order_items(order, validated_items):
    created_items = []
    for product, qty, line_total in validated_items:
        product.deduct_stock(qty)
        order_item = OrderItem(
            order_id=order.id,
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            quantity=qty,
            total_price=line_total,
        )
        db.session.add(order_item)
        created_items.append(order_item)
    return created_items
