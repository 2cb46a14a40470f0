from flask import Blueprint, request, jsonify
from storefront.exceptions import NotFoundError
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService
from storefront.utils.validators import validate_pagination, parse_price_arg, paginated_response

catalog_bp = Blueprint("catalog", __name__)

PUBLIC_PAGE_SIZE = 12
PUBLIC_MAX_PAGE_SIZE = 48


@catalog_bp.route("/products", methods=["GET"])
def search_products():
    """Browse active products"""
    search = (request.args.get("search") or "").strip() or None
    category_id = request.args.get("category_id")
    page, per_page = validate_pagination(PUBLIC_PAGE_SIZE, PUBLIC_MAX_PAGE_SIZE)

    try:
        pagination = ProductService.search_products(
            search=search,
            category_id=category_id,
            min_price=parse_price_arg("min_price"),
            max_price=parse_price_arg("max_price"),
            is_active=True,
            page=page,
            per_page=per_page,
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    categories = [c.summary() for c in CategoryService.list_categories(active_only=True)]
    return jsonify(paginated_response("products", pagination, page, per_page, categories=categories)), 200


@catalog_bp.route("/products/<id_or_slug>", methods=["GET"])
def get_product(id_or_slug):
    """Get product detail"""
    try:
        product = ProductService.get_public_product(id_or_slug)
        return jsonify({"product": product.to_dict()}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@catalog_bp.route("/categories", methods=["GET"])
def get_categories():
    """Active categories, flat or nested with ?tree=1"""
    if request.args.get("tree", type=int):
        return jsonify({"categories": CategoryService.category_tree()}), 200

    categories = CategoryService.list_categories(active_only=True)
    return jsonify({"categories": [c.to_dict() for c in categories]}), 200
