from functools import wraps
from flask import jsonify
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from storefront.extensions import db
from storefront.models.user import User


def _load_current_user():
    verify_jwt_in_request()
    user = db.session.get(User, get_jwt_identity())
    if not user or not user.is_active:
        return None
    return user


def login_required(fn):
    """Require a valid access token for an active user and pass it as current_user"""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = _load_current_user()
        if not user:
            return jsonify({'error': 'Unauthorized'}), 401

        kwargs['current_user'] = user
        return fn(*args, **kwargs)
    return wrapper


def role_required(*roles):
    """Decorator to check if user has required role"""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            user = _load_current_user()
            if not user or user.role not in roles:
                return jsonify({'error': 'Unauthorized'}), 401

            # Pass user to route handler
            kwargs['current_user'] = user
            return fn(*args, **kwargs)
        return wrapper
    return decorator
