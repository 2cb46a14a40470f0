from flask import Blueprint, request, jsonify
from storefront.enums import UserRole
from storefront.exceptions import NotFoundError
from storefront.schemas import ProductCreateSchema, ProductUpdateSchema
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService
from storefront.utils.decorators import role_required
from storefront.utils.uploads import collect_images
from storefront.utils.validators import validate_schema, validate_pagination, paginated_response

product_admin_bp = Blueprint("products", __name__)


@product_admin_bp.route("/", methods=["GET"])
@role_required(UserRole.ADMIN)
def get_products(current_user):
    """Get all products, including inactive ones"""
    search = request.args.get("search")
    category_id = request.args.get("category_id")
    page, per_page = validate_pagination(default_per_page=10, max_per_page=50)

    pagination = ProductService.search_products(
        search=search,
        category_id=category_id,
        is_active=None,
        page=page,
        per_page=per_page,
    )

    return jsonify(paginated_response("products", pagination, page, per_page)), 200


@product_admin_bp.route("/<product_id>", methods=["GET"])
@role_required(UserRole.ADMIN)
def get_product(product_id, current_user):
    """Get product detail with the category choices for the edit form"""
    try:
        product = ProductService.get_product_by_id(product_id)
        categories = sorted(CategoryService.list_categories(), key=lambda c: c.name)
        return jsonify({
            "product": product.to_dict(),
            "categories": [c.summary() for c in categories],
        }), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@product_admin_bp.route("/", methods=["POST"])
@role_required(UserRole.ADMIN)
@validate_schema(ProductCreateSchema, location="form")
def create_product(current_user):
    """Create product from multipart form data"""
    try:
        product = ProductService.create_product(image_files=collect_images(), **request.validated_data)
        return jsonify({"product": product.to_dict()}), 201
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@product_admin_bp.route("/<product_id>", methods=["PATCH"])
@role_required(UserRole.ADMIN)
@validate_schema(ProductUpdateSchema, location="form")
def update_product(product_id, current_user):
    """Partially update product; uploaded images are appended"""
    try:
        product = ProductService.update_product(product_id, image_files=collect_images(), **request.validated_data)
        return jsonify({"product": product.to_dict()}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@product_admin_bp.route("/<product_id>", methods=["DELETE"])
@role_required(UserRole.ADMIN)
def delete_product(product_id, current_user):
    """Delete product (soft delete)"""
    try:
        ProductService.delete_product(product_id)
        return jsonify({"success": True}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
