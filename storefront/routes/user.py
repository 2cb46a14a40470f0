from flask import Blueprint, request, jsonify
from storefront.schemas import AddressSchema
from storefront.services.user_service import UserService
from storefront.utils.decorators import login_required
from storefront.utils.validators import validate_schema

user_bp = Blueprint("user", __name__)


@user_bp.route("/address", methods=["GET"])
@login_required
def get_address(current_user):
    return jsonify(UserService.get_address(current_user)), 200


@user_bp.route("/address", methods=["PATCH"])
@login_required
@validate_schema(AddressSchema)
def update_address(current_user):
    address = UserService.update_address(current_user, **request.validated_data)
    return jsonify({"message": "Address saved successfully", "address": address}), 200
