from flask import Blueprint, request, jsonify
from storefront.enums import UserRole
from storefront.exceptions import NotFoundError
from storefront.schemas import OrderUpdateSchema
from storefront.services.order_service import OrderService
from storefront.utils.decorators import role_required
from storefront.utils.validators import validate_schema, validate_pagination

order_admin_bp = Blueprint("orders", __name__)


def _order_summary(order):
    user = order.user
    return {
        "id": order.id,
        "order_number": order.order_number,
        "total_amount": str(order.total_amount),
        "status": order.status.value,
        "payment_status": order.payment_status.value,
        "created_at": order.created_at.isoformat(),
        "item_count": order.item_count,
        "customer": {
            "name": user.name if user else "Guest",
            "email": user.email if user else "N/A",
            "phone_number": (user.phone_number if user else None) or "N/A",
        },
    }


@order_admin_bp.route("/", methods=["GET"])
@role_required(UserRole.ADMIN)
def get_orders(current_user):
    """Get all orders"""
    status = request.args.get("status")
    page, per_page = validate_pagination(default_per_page=10, max_per_page=50)

    try:
        pagination = OrderService.get_orders(status=status, page=page, per_page=per_page)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return (
        jsonify(
            {
                "orders": [_order_summary(o) for o in pagination.items],
                "total": pagination.total,
                "page": page,
                "per_page": per_page,
                "pages": max(1, pagination.pages),
            }
        ),
        200,
    )


@order_admin_bp.route("/<order_id>", methods=["GET"])
@role_required(UserRole.ADMIN)
def get_order(order_id, current_user):
    """Get order detail"""
    try:
        order = OrderService.get_order_by_id(order_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    data = order.to_dict(include_items=True)
    data["customer"] = order.user.to_dict() if order.user else None
    return jsonify({"order": data}), 200


@order_admin_bp.route("/<order_id>", methods=["PATCH"])
@role_required(UserRole.ADMIN)
@validate_schema(OrderUpdateSchema)
def update_order(order_id, current_user):
    """Change order and/or payment status"""
    data = request.validated_data
    try:
        order = OrderService.update_order(
            order_id,
            status=data.get("status"),
            payment_status=data.get("payment_status"),
        )
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "id": order.id,
        "status": order.status.value,
        "payment_status": order.payment_status.value,
        "updated_at": order.updated_at.isoformat(),
    }), 200
