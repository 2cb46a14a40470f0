from storefront.models.base import BaseModel, SoftDeleteMixin
from storefront.extensions import db


class Product(BaseModel, SoftDeleteMixin):
    __tablename__ = "products"

    category_id = db.Column(
        db.String(36),
        db.ForeignKey("product_categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name = db.Column(db.String(255), nullable=False, index=True)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    description = db.Column(db.Text)
    price = db.Column(db.Numeric(12, 2), nullable=False)
    compare_at_price = db.Column(db.Numeric(12, 2))
    stock = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    __table_args__ = (db.CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)

    # Relationships
    images = db.relationship(
        "ProductImage",
        backref="product",
        order_by="ProductImage.position",
        cascade="all, delete-orphan",
    )
    order_items = db.relationship("OrderItem", backref="product")

    @property
    def is_available(self) -> bool:
        return self.is_active and not self.is_deleted

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def deduct_stock(self, quantity: int):
        if not self.has_stock(quantity):
            raise ValueError(f"Insufficient stock for product {self.name}")
        self.stock -= quantity
        return self

    def add_stock(self, quantity: int):
        self.stock += quantity
        return self

    @property
    def primary_image(self):
        return self.images[0].url if self.images else None

    def summary(self):
        """Compact shape embedded in cart lines and order items"""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "price": str(self.price),
            "compare_at_price": str(self.compare_at_price) if self.compare_at_price is not None else None,
            "image": self.primary_image,
            "category": self.category.summary() if self.category else None,
        }

    def to_dict(self):
        data = super().to_dict()
        data.pop("deleted_at", None)
        data["category"] = self.category.summary() if self.category else None
        data["images"] = [image.to_dict() for image in self.images]
        return data


class ProductImage(BaseModel):
    __tablename__ = "product_images"

    product_id = db.Column(
        db.String(36),
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url = db.Column(db.String(500), nullable=False)
    alt = db.Column(db.String(255))
    position = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {"id": self.id, "url": self.url, "alt": self.alt, "position": self.position}
