from storefront.models.base import BaseModel
from storefront.extensions import db
from storefront.enums import OrderStatus, PaymentStatus


class Order(BaseModel):
    __tablename__ = "orders"

    order_number = db.Column(db.String(50), unique=True, nullable=False, index=True)
    user_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=False, index=True
    )
    subtotal = db.Column(db.Numeric(12, 2), nullable=False)
    shipping_total = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    tax_total = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    total_amount = db.Column(db.Numeric(12, 2), nullable=False)
    status = db.Column(
        db.Enum(OrderStatus, name="order_statuses"), nullable=False, default=OrderStatus.PENDING
    )
    payment_status = db.Column(
        db.Enum(PaymentStatus, name="payment_statuses"), nullable=False, default=PaymentStatus.UNPAID
    )
    shipping_address = db.Column(db.JSON)
    billing_address = db.Column(db.JSON)
    payment_reference = db.Column(db.String(100), index=True)

    # Relationships
    items = db.relationship(
        "OrderItem", backref="order", lazy="dynamic", cascade="all, delete-orphan"
    )

    @property
    def item_count(self) -> int:
        return self.items.count()

    def totals(self):
        return {
            "subtotal": str(self.subtotal),
            "shipping_total": str(self.shipping_total),
            "tax_total": str(self.tax_total),
            "total_amount": str(self.total_amount),
        }

    def to_dict(self, include_items=False):
        data = super().to_dict()
        if include_items:
            data["items"] = [item.to_dict() for item in self.items]
        return data


class OrderItem(BaseModel):
    __tablename__ = "order_items"

    order_id = db.Column(
        db.String(36),
        db.ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = db.Column(
        db.String(36),
        db.ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    product_name = db.Column(db.String(255), nullable=False)
    unit_price = db.Column(db.Numeric(12, 2), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    total_price = db.Column(db.Numeric(12, 2), nullable=False)

    def to_dict(self):
        data = super().to_dict()
        data["image"] = self.product.primary_image if self.product else None
        return data
