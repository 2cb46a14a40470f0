import logging
from decimal import Decimal

from sqlalchemy import or_

from storefront.extensions import db
from storefront.exceptions import NotFoundError
from storefront.models.cart import CartItem
from storefront.models.category import ProductCategory
from storefront.models.product import Product, ProductImage
from storefront.utils.helpers import unique_slug
from storefront.utils.uploads import save_file, validate_images

logger = logging.getLogger(__name__)


class ProductService:
    """Product service handling product operations"""

    @staticmethod
    def _attach_images(product: Product, image_files, name: str):
        validate_images(image_files)
        start = len(product.images)
        for offset, file in enumerate(image_files):
            url = save_file(file)
            position = start + offset
            product.images.append(
                ProductImage(url=url, alt=f"{name} image {position + 1}", position=position)
            )

    @staticmethod
    def _require_category(category_id: str):
        if not db.session.get(ProductCategory, category_id):
            raise ValueError("Category not found")

    @staticmethod
    def create_product(name: str, price: Decimal, category_id: str, image_files=(), **kwargs) -> Product:
        """Create new product"""
        ProductService._require_category(category_id)

        product = Product(
            name=name,
            slug=unique_slug(Product, name),
            price=price,
            category_id=category_id,
            description=kwargs.get("description"),
            compare_at_price=kwargs.get("compare_at_price"),
            stock=kwargs.get("stock", 0),
            is_active=kwargs.get("is_active", True),
        )
        ProductService._attach_images(product, list(image_files), name)

        db.session.add(product)
        db.session.commit()

        logger.info("Created product %s (%s) with %d images", product.id, product.slug, len(product.images))
        return product

    @staticmethod
    def update_product(product_id: str, image_files=(), **kwargs) -> Product:
        """Update product"""
        product = ProductService.get_product_by_id(product_id)

        if "category_id" in kwargs:
            ProductService._require_category(kwargs["category_id"])

        # Update slug if name changed
        if "name" in kwargs and kwargs["name"] != product.name:
            kwargs["slug"] = unique_slug(Product, kwargs["name"], exclude_id=product.id)

        ProductService._attach_images(product, list(image_files), kwargs.get("name", product.name))

        product.update(**kwargs)
        return product

    @staticmethod
    def delete_product(product_id: str):
        """Soft delete product and drop it from every cart"""
        product = ProductService.get_product_by_id(product_id)

        CartItem.query.filter_by(product_id=product.id).delete(synchronize_session=False)
        product.is_active = False
        product.soft_delete()

        logger.info("Deleted product %s", product_id)
        return product

    @staticmethod
    def get_product_by_id(product_id: str) -> Product:
        """Get product by ID"""
        product = db.session.get(Product, product_id)
        if not product or product.is_deleted:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def get_public_product(id_or_slug: str) -> Product:
        """Active product looked up by id or slug"""
        product = (
            Product.query.filter(or_(Product.id == id_or_slug, Product.slug == id_or_slug))
            .filter(Product.deleted_at.is_(None))
            .first()
        )
        if not product or not product.is_active:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    def search_products(search: str = None, category_id: str = None, min_price: Decimal = None,
    max_price: Decimal = None, is_active: bool = True, page: int = 1, per_page: int = 20,):
        """Search products with filters"""
        if min_price is not None and max_price is not None and max_price < min_price:
            raise ValueError("max_price must be greater than or equal to min_price")

        query = Product.query.filter(Product.deleted_at.is_(None))

        if is_active is not None:
            query = query.filter_by(is_active=is_active)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))

        if category_id:
            query = query.filter_by(category_id=category_id)

        if min_price is not None:
            query = query.filter(Product.price >= min_price)

        if max_price is not None:
            query = query.filter(Product.price <= max_price)

        return query.order_by(Product.created_at.desc()).paginate(
            page=page, per_page=per_page, error_out=False
        )
