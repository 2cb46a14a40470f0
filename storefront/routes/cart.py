from flask import Blueprint, request, jsonify
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from storefront.exceptions import NotFoundError
from storefront.schemas import CartItemAddSchema, CartItemUpdateSchema
from storefront.services.cart_service import CartService
from storefront.utils.decorators import login_required
from storefront.utils.validators import validate_schema

cart_bp = Blueprint("cart", __name__)


@cart_bp.route("/", methods=["GET"])
@login_required
def get_cart(current_user):
    """Get the user's cart with totals"""
    cart = CartService.get_or_create_cart(current_user.id)
    return jsonify(cart.to_dict()), 200


@cart_bp.route("/", methods=["POST"])
@login_required
@validate_schema(CartItemAddSchema)
def add_item(current_user):
    """Add item to cart"""
    data = request.validated_data
    try:
        item = CartService.add_item(current_user.id, data["product_id"], data["quantity"])
        return jsonify({"message": "Item added to cart successfully", "item": item.to_dict()}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@cart_bp.route("/count", methods=["GET"])
def get_count():
    """Total quantity in the cart; 0 for anonymous visitors"""
    try:
        verify_jwt_in_request(optional=True)
        user_id = get_jwt_identity()
    except (JWTExtendedException, PyJWTError):
        # stale or broken tokens count as anonymous
        user_id = None
    if not user_id:
        return jsonify({"count": 0}), 200
    return jsonify({"count": CartService.count_items(user_id)}), 200


@cart_bp.route("/<item_id>", methods=["PATCH"])
@login_required
@validate_schema(CartItemUpdateSchema)
def update_item(item_id, current_user):
    """Update cart item quantity"""
    try:
        item = CartService.update_item(current_user.id, item_id, request.validated_data["quantity"])
        return jsonify({"message": "Cart item updated successfully", "item": item.to_dict()}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@cart_bp.route("/<item_id>", methods=["DELETE"])
@login_required
def remove_item(item_id, current_user):
    """Remove item from cart"""
    try:
        CartService.remove_item(current_user.id, item_id)
        return jsonify({"message": "Item removed from cart successfully"}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
