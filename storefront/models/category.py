from storefront.models.base import BaseModel
from storefront.extensions import db


class ProductCategory(BaseModel):
    """Hierarchical product grouping"""

    __tablename__ = "product_categories"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    description = db.Column(db.Text)
    parent_id = db.Column(
        db.String(36),
        db.ForeignKey("product_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Relationships
    parent = db.relationship(
        "ProductCategory", remote_side="ProductCategory.id", backref=db.backref("children", lazy="dynamic")
    )
    products = db.relationship("Product", backref="category", lazy="dynamic")

    def summary(self):
        return {"id": self.id, "name": self.name}

    def to_dict(self, include_children=False):
        data = super().to_dict()
        if include_children:
            data["children"] = [
                child.to_dict(include_children=True)
                for child in self.children.filter_by(is_active=True).order_by(ProductCategory.name)
            ]
        return data
