from flask import Blueprint, request, jsonify
from storefront.enums import UserRole
from storefront.exceptions import NotFoundError
from storefront.schemas import CategoryCreateSchema, CategoryUpdateSchema
from storefront.services.category_service import CategoryService
from storefront.utils.decorators import role_required
from storefront.utils.validators import validate_schema

category_admin_bp = Blueprint("categories", __name__)


@category_admin_bp.route("/", methods=["GET"])
@role_required(UserRole.ADMIN)
def get_categories(current_user):
    """Get all categories, newest first"""
    categories = CategoryService.list_categories()
    return jsonify({"categories": [c.to_dict() for c in categories]}), 200


@category_admin_bp.route("/", methods=["POST"])
@role_required(UserRole.ADMIN)
@validate_schema(CategoryCreateSchema)
def create_category(current_user):
    """Create category"""
    try:
        category = CategoryService.create_category(**request.validated_data)
        return jsonify({"category": category.to_dict()}), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@category_admin_bp.route("/<category_id>", methods=["PATCH"])
@role_required(UserRole.ADMIN)
@validate_schema(CategoryUpdateSchema)
def update_category(category_id, current_user):
    """Update category"""
    try:
        category = CategoryService.update_category(category_id, **request.validated_data)
        return jsonify({"category": category.to_dict()}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@category_admin_bp.route("/<category_id>", methods=["DELETE"])
@role_required(UserRole.ADMIN)
def delete_category(category_id, current_user):
    """Delete an empty category"""
    try:
        CategoryService.delete_category(category_id)
        return jsonify({"success": True}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
