from flask import Blueprint, jsonify
from sqlalchemy import func
from storefront.enums import OrderStatus, PaymentStatus, UserRole
from storefront.extensions import db
from storefront.models.category import ProductCategory
from storefront.models.order import Order
from storefront.models.product import Product
from storefront.models.user import User
from storefront.utils.decorators import role_required

dashboard_admin_bp = Blueprint("dashboard_admin", __name__)


@dashboard_admin_bp.route("/", methods=["GET"])
@role_required(UserRole.ADMIN)
def get_dashboard(current_user):
    """Get admin dashboard statistics"""
    # User statistics
    total_customers = User.query.filter_by(role=UserRole.CUSTOMER).count()
    active_customers = User.query.filter_by(role=UserRole.CUSTOMER, is_active=True).count()

    # Product statistics
    live_products = Product.query.filter(Product.deleted_at.is_(None))
    total_products = live_products.count()
    active_products = live_products.filter(Product.is_active.is_(True)).count()
    out_of_stock = live_products.filter(Product.stock == 0).count()

    # Order statistics
    orders_by_status = dict(
        db.session.query(Order.status, func.count(Order.id)).group_by(Order.status).all()
    )

    # Revenue statistics
    total_revenue = (
        db.session.query(func.sum(Order.total_amount))
        .filter(Order.payment_status == PaymentStatus.PAID)
        .scalar()
        or 0
    )

    return (
        jsonify(
            {
                "users": {
                    "customers": total_customers,
                    "active_customers": active_customers,
                },
                "products": {
                    "total": total_products,
                    "active": active_products,
                    "out_of_stock": out_of_stock,
                },
                "categories": {"total": ProductCategory.query.count()},
                "orders": {
                    "total": sum(orders_by_status.values()),
                    **{status.value: orders_by_status.get(status, 0) for status in OrderStatus},
                },
                "revenue": {"total": f"{total_revenue:.2f}"},
            }
        ),
        200,
    )
