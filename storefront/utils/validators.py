from functools import wraps
from decimal import Decimal, InvalidOperation
from flask import request, jsonify
from marshmallow import ValidationError


def validate_schema(schema_class, location="json"):
    """Decorator to validate request data against schema.

    `location` is "json" for JSON bodies or "form" for multipart/form data.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            schema = schema_class()
            if location == "form":
                payload = request.form.to_dict()
            else:
                payload = request.get_json(silent=True)
                if payload is None:
                    return jsonify({'error': 'Validation error', 'messages': {'_schema': ['Request body must be JSON']}}), 400
            try:
                validated_data = schema.load(payload)
                request.validated_data = validated_data
                return f(*args, **kwargs)
            except ValidationError as err:
                return jsonify({'error': 'Validation error', 'messages': err.messages}), 400
        return decorated_function
    return decorator


def validate_pagination(default_per_page=20, max_per_page=100):
    """Validate pagination parameters"""
    page = request.args.get('page', 1, type=int)
    per_page = request.args.get('per_page', default_per_page, type=int)

    if page < 1:
        page = 1
    if per_page < 1:
        per_page = default_per_page
    per_page = min(per_page, max_per_page)

    return page, per_page


def parse_price_arg(name):
    """Non-negative price from the query string, or None when absent or malformed"""
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return value


def paginated_response(key, pagination, page, per_page, **extra):
    body = {
        key: [item.to_dict() for item in pagination.items],
        "total": pagination.total,
        "page": page,
        "per_page": per_page,
        "pages": max(1, pagination.pages),
    }
    body.update(extra)
    return body
