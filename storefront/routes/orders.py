from flask import Blueprint, request, jsonify
from storefront.exceptions import NotFoundError
from storefront.schemas import OrderCreateSchema
from storefront.services.order_service import OrderService
from storefront.utils.decorators import login_required
from storefront.utils.validators import validate_schema, validate_pagination, paginated_response

order_bp = Blueprint("orders", __name__)


@order_bp.route("/", methods=["POST"])
@login_required
@validate_schema(OrderCreateSchema)
def create_order(current_user):
    """Create an order from selected cart items"""
    try:
        order = OrderService.create_order_from_cart(current_user, request.validated_data["items"])
        return (
            jsonify(
                {
                    "id": order.id,
                    "order_number": order.order_number,
                    **order.totals(),
                }
            ),
            201,
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@order_bp.route("/", methods=["GET"])
@login_required
def get_orders(current_user):
    """Get the user's orders"""
    status = request.args.get("status")
    page, per_page = validate_pagination()

    try:
        pagination = OrderService.get_orders(
            user_id=current_user.id,
            status=status,
            page=page,
            per_page=per_page,
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(paginated_response("orders", pagination, page, per_page)), 200


@order_bp.route("/<order_id>", methods=["GET"])
@login_required
def get_order(order_id, current_user):
    """Get order detail"""
    try:
        order = OrderService.get_order_by_id(order_id, current_user.id)
        return jsonify({"order": order.to_dict(include_items=True)}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
