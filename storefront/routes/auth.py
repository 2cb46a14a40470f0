from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity, get_jwt, create_access_token
from storefront.exceptions import ConflictError, NotFoundError
from storefront.services.auth_service import AuthService
from storefront.schemas import RegisterSchema, LoginSchema
from storefront.utils.validators import validate_schema

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
@validate_schema(RegisterSchema)
def register():
    """Register new customer"""
    try:
        data = request.validated_data
        user = AuthService.register_user(**data)

        return (
            jsonify(
                {"message": "User created", "user": user.to_dict()}
            ),
            201,
        )
    except ConflictError as e:
        return jsonify({"error": str(e)}), 409


@auth_bp.route("/login", methods=["POST"])
@validate_schema(LoginSchema)
def login():
    """User login"""
    try:
        data = request.validated_data
        result = AuthService.login_user(**data)
        return jsonify(result), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 401


@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh():
    """Refresh access token"""
    user_id = get_jwt_identity()
    access_token = create_access_token(identity=user_id, additional_claims={"role": get_jwt().get("role")})
    return jsonify({"access_token": access_token}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def get_me():
    """Get current user info"""
    try:
        user = AuthService.get_user_by_id(get_jwt_identity())
        return jsonify({"user": user.to_dict()}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
