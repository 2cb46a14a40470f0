from flask import Blueprint, request, jsonify
from storefront.exceptions import NotFoundError, PaymentGatewayError
from storefront.schemas import PaymentInitiateSchema, PaymentVerifySchema
from storefront.services.payment_service import PaymentService
from storefront.utils.decorators import login_required
from storefront.utils.validators import validate_schema

payment_bp = Blueprint("payment", __name__)


@payment_bp.route("/", methods=["POST"])
@login_required
@validate_schema(PaymentInitiateSchema)
def initiate_payment(current_user):
    """Start a hosted checkout for an unpaid order"""
    try:
        result = PaymentService.initiate_payment(request.validated_data["order_id"], current_user)
        return jsonify(result), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except PaymentGatewayError as e:
        return jsonify({"error": e.message}), 502


@payment_bp.route("/verify", methods=["POST"])
@login_required
@validate_schema(PaymentVerifySchema)
def verify_payment(current_user):
    """Confirm a payment after the gateway redirects back"""
    data = request.validated_data
    try:
        order = PaymentService.verify_payment(data["order_id"], data["pidx"], current_user)
        return jsonify({"message": "Payment verified", "order": order.to_dict()}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except PaymentGatewayError as e:
        return jsonify({"error": e.message}), 502
