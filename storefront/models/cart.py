from decimal import Decimal

from storefront.models.base import BaseModel
from storefront.extensions import db


class Cart(BaseModel):
    __tablename__ = "carts"

    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    items = db.relationship(
        "CartItem",
        backref="cart",
        order_by="CartItem.created_at",
        cascade="all, delete-orphan",
    )

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def to_dict(self):
        subtotal = self.subtotal
        return {
            "id": self.id,
            "items": [item.to_dict() for item in self.items],
            "subtotal": f"{subtotal:.2f}",
            "total": f"{subtotal:.2f}",
            "item_count": self.item_count,
        }


class CartItem(BaseModel):
    __tablename__ = "cart_items"

    cart_id = db.Column(
        db.String(36),
        db.ForeignKey("carts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = db.Column(
        db.String(36),
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity = db.Column(db.Integer, nullable=False, default=1)

    __table_args__ = (
        db.UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),
        db.CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
    )

    product = db.relationship("Product")

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity

    def to_dict(self):
        return {
            "id": self.id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "product": self.product.summary(),
        }
