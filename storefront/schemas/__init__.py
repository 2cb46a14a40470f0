from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE, pre_load
from storefront.enums import OrderStatus, PaymentStatus


class RegisterSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=2, max=255))
    email = fields.Email(required=True)
    password = fields.Str(required=True, validate=validate.Length(min=6))


class LoginSchema(Schema):
    email = fields.Email(required=True)
    password = fields.Str(required=True)


class AddressSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    phone_number = fields.Str(required=True, validate=validate.Length(min=1, max=20))
    region = fields.Str(required=True, validate=validate.Length(min=1, max=120))
    city = fields.Str(required=True, validate=validate.Length(min=1, max=120))
    street = fields.Str(required=True, validate=validate.Length(min=1, max=255))


class CategoryCreateSchema(Schema):
    name = fields.Str(required=True, validate=validate.Length(min=2, max=255))
    description = fields.Str(allow_none=True)
    parent_id = fields.Str(allow_none=True)


class CategoryUpdateSchema(Schema):
    name = fields.Str(validate=validate.Length(min=2, max=255))
    description = fields.Str(allow_none=True)
    parent_id = fields.Str(allow_none=True)
    is_active = fields.Bool()


class _ProductFormSchema(Schema):
    """Multipart form fields arrive as strings; blank optional values are dropped"""

    blank_clears_compare_price = False

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def strip_blank_values(self, data, **kwargs):
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, str):
                value = value.strip()
            if value == "":
                if key == "compare_at_price" and self.blank_clears_compare_price:
                    cleaned[key] = None
                continue
            cleaned[key] = value
        return cleaned


class ProductCreateSchema(_ProductFormSchema):
    name = fields.Str(required=True, validate=validate.Length(min=2, max=255))
    description = fields.Str()
    price = fields.Decimal(required=True, places=2, validate=validate.Range(min=0))
    compare_at_price = fields.Decimal(places=2, allow_none=True, validate=validate.Range(min=0))
    stock = fields.Int(validate=validate.Range(min=0))
    category_id = fields.Str(required=True)
    is_active = fields.Bool(truthy={"true", "on", "1", True}, falsy={"false", "off", "0", False})


class ProductUpdateSchema(_ProductFormSchema):
    # an empty compare-at price clears it
    blank_clears_compare_price = True

    name = fields.Str(validate=validate.Length(min=2, max=255))
    description = fields.Str()
    price = fields.Decimal(places=2, validate=validate.Range(min=0))
    compare_at_price = fields.Decimal(places=2, allow_none=True, validate=validate.Range(min=0))
    stock = fields.Int(validate=validate.Range(min=0))
    category_id = fields.Str()
    is_active = fields.Bool(truthy={"true", "on", "1", True}, falsy={"false", "off", "0", False})


class CartItemAddSchema(Schema):
    product_id = fields.Str(required=True)
    quantity = fields.Int(load_default=1, validate=validate.Range(min=1))


class CartItemUpdateSchema(Schema):
    quantity = fields.Int(required=True, validate=validate.Range(min=1))


class OrderCreateSchema(Schema):
    items = fields.List(
        fields.Str(), required=True, validate=validate.Length(min=1)
    )


class OrderUpdateSchema(Schema):
    status = fields.Enum(OrderStatus, by_value=True)
    payment_status = fields.Enum(PaymentStatus, by_value=True)

    @validates_schema
    def require_one_field(self, data, **kwargs):
        if not data.get("status") and not data.get("payment_status"):
            raise ValidationError("Provide status or payment_status")


class PaymentInitiateSchema(Schema):
    order_id = fields.Str(required=True)


class PaymentVerifySchema(Schema):
    order_id = fields.Str(required=True)
    pidx = fields.Str(required=True)
