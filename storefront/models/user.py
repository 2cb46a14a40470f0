from storefront.models.base import BaseModel
from storefront.extensions import db
from storefront.enums import UserRole
import bcrypt

ADDRESS_FIELDS = ("name", "phone_number", "region", "city", "street")
DELIVERY_FIELDS = ("phone_number", "region", "city", "street")


class User(BaseModel):
    __tablename__ = "users"

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name = db.Column(db.String(255))
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(UserRole, name="user_roles"), nullable=False, default=UserRole.CUSTOMER)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Address used as the shipping destination at checkout
    phone_number = db.Column(db.String(20))
    region = db.Column(db.String(120))
    city = db.Column(db.String(120))
    street = db.Column(db.String(255))

    # Relationships
    cart = db.relationship("Cart", backref="user", uselist=False, cascade="all, delete-orphan")  # 1 User - 1 Cart
    orders = db.relationship("Order", backref="user", lazy="dynamic")

    def set_password(self, password: str):
        self.password_hash = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt()
        ).decode("utf-8")

    def check_password(self, password: str) -> bool:
        return bcrypt.checkpw(
            password.encode("utf-8"), self.password_hash.encode("utf-8")
        )

    def has_role(self, role) -> bool:
        return self.role == role

    def address_dict(self) -> dict:
        return {field: getattr(self, field) or "" for field in ADDRESS_FIELDS}

    def has_any_address(self) -> bool:
        """True once any delivery field is saved; the name alone does not count"""
        return any(getattr(self, field) for field in DELIVERY_FIELDS)

    def has_complete_address(self) -> bool:
        return all(getattr(self, field) for field in ADDRESS_FIELDS)

    def to_dict(self, include_sensitive=False):
        data = super().to_dict()
        if not include_sensitive:
            data.pop("password_hash", None)
        return data
