import logging

from storefront.extensions import db
from storefront.exceptions import NotFoundError
from storefront.models.category import ProductCategory
from storefront.utils.helpers import unique_slug

logger = logging.getLogger(__name__)


class CategoryService:
    @staticmethod
    def list_categories(active_only: bool = False):
        query = ProductCategory.query
        if active_only:
            return query.filter_by(is_active=True).order_by(ProductCategory.name.asc()).all()
        return query.order_by(ProductCategory.created_at.desc()).all()

    @staticmethod
    def category_tree():
        """Active root categories with their active descendants nested"""
        roots = (
            ProductCategory.query.filter_by(parent_id=None, is_active=True)
            .order_by(ProductCategory.name.asc())
            .all()
        )
        return [root.to_dict(include_children=True) for root in roots]

    @staticmethod
    def get_category(category_id: str) -> ProductCategory:
        category = db.session.get(ProductCategory, category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    @staticmethod
    def create_category(name: str, description: str = None, parent_id: str = None) -> ProductCategory:
        if parent_id and not db.session.get(ProductCategory, parent_id):
            raise ValueError("Parent category not found")

        category = ProductCategory(
            name=name,
            slug=unique_slug(ProductCategory, name),
            description=description,
            parent_id=parent_id or None,
        )
        db.session.add(category)
        db.session.commit()

        logger.info("Created category %s (%s)", category.id, category.slug)
        return category

    @staticmethod
    def update_category(category_id: str, **kwargs) -> ProductCategory:
        category = CategoryService.get_category(category_id)

        if "parent_id" in kwargs:
            parent_id = kwargs["parent_id"] or None
            if parent_id:
                parent = db.session.get(ProductCategory, parent_id)
                if not parent:
                    raise ValueError("Parent category not found")
                # walk up from the new parent; reaching this category would form a cycle
                ancestor = parent
                while ancestor is not None:
                    if ancestor.id == category.id:
                        raise ValueError("Category cannot be its own ancestor")
                    ancestor = ancestor.parent
            kwargs["parent_id"] = parent_id

        if "name" in kwargs and kwargs["name"] != category.name:
            kwargs["slug"] = unique_slug(ProductCategory, kwargs["name"], exclude_id=category.id)

        return category.update(**kwargs)

    @staticmethod
    def delete_category(category_id: str):
        category = CategoryService.get_category(category_id)

        if category.products.count():
            raise ValueError("Category still has products")
        if category.children.count():
            raise ValueError("Category still has subcategories")

        category.delete()
        logger.info("Deleted category %s", category_id)
