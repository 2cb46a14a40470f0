"""Hosted checkout through the Khalti ePayment gateway.

The storefront never handles card or wallet credentials: it asks the
gateway for a payment session (``pidx`` + ``payment_url``), redirects the
customer there, and confirms the outcome with a lookup once the customer
returns to ``/checkout/success``.
"""

import logging

import requests
from flask import current_app

from storefront.enums import PaymentStatus
from storefront.exceptions import PaymentGatewayError
from storefront.models.order import Order
from storefront.models.user import User
from storefront.services.order_service import OrderService
from storefront.utils.helpers import to_amount_in_paisa

logger = logging.getLogger(__name__)


class KhaltiClient:
    """Thin wrapper over the two ePayment endpoints the checkout needs"""

    def __init__(self, base_url: str, secret_key: str, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.secret_key = secret_key
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            base_url=config["KHALTI_URL"],
            secret_key=config["KHALTI_SECRET_KEY"],
            timeout=config["KHALTI_TIMEOUT"],
        )

    def _post(self, path: str, payload: dict) -> dict:
        try:
            response = requests.post(
                f"{self.base_url}{path}",
                json=payload,
                headers={
                    "Authorization": f"Key {self.secret_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Payment gateway unreachable: %s", e)
            raise PaymentGatewayError("Payment gateway is unavailable") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            logger.warning("Payment gateway rejected %s: %s %s", path, response.status_code, data)
            message = data.get("detail") or data.get("error_key") or "Payment gateway rejected the request"
            raise PaymentGatewayError(str(message), details=data)

        return data

    def initiate(self, payload: dict) -> dict:
        return self._post("/epayment/initiate/", payload)

    def lookup(self, pidx: str) -> dict:
        return self._post("/epayment/lookup/", {"pidx": pidx})


class PaymentService:
    @staticmethod
    def _client() -> KhaltiClient:
        return KhaltiClient.from_config(current_app.config)

    @staticmethod
    def build_initiate_payload(order: Order, user: User) -> dict:
        base_url = current_app.config["BASE_URL"].rstrip("/")
        items = order.items.all()
        address = order.shipping_address or {}

        return {
            "return_url": f"{base_url}/checkout/success?orderId={order.id}",
            "website_url": base_url,
            "amount": to_amount_in_paisa(order.total_amount),
            "purchase_order_id": order.order_number,
            "purchase_order_name": ",".join(item.product_name for item in items),
            "customer_info": {
                "name": address.get("name") or user.name,
                "email": user.email,
                "phone": address.get("phone_number"),
            },
            "product_details": [
                {
                    "identity": item.product_id,
                    "name": item.product_name,
                    "total_price": to_amount_in_paisa(item.total_price),
                    "quantity": item.quantity,
                    "unit_price": to_amount_in_paisa(item.unit_price),
                }
                for item in items
            ],
        }

    @staticmethod
    def initiate_payment(order_id: str, user: User) -> dict:
        order = OrderService.get_order_by_id(order_id, user.id)
        if order.payment_status != PaymentStatus.UNPAID:
            raise ValueError("Order is already paid")

        payload = PaymentService.build_initiate_payload(order, user)
        result = PaymentService._client().initiate(payload)

        pidx = result.get("pidx")
        if not pidx:
            raise PaymentGatewayError("Payment gateway did not return a payment id", details=result)

        order.payment_reference = pidx
        order.update()

        logger.info("Initiated payment %s for order %s", pidx, order.order_number)
        return {
            "order_id": order.id,
            "pidx": pidx,
            "payment_url": result.get("payment_url"),
            "expires_at": result.get("expires_at"),
        }

    @staticmethod
    def verify_payment(order_id: str, pidx: str, user: User) -> Order:
        order = OrderService.get_order_by_id(order_id, user.id)
        if order.payment_status == PaymentStatus.PAID:
            return order

        if not order.payment_reference or order.payment_reference != pidx:
            raise ValueError("Payment does not belong to this order")

        # a pidx settles exactly one order
        claimed = Order.query.filter(Order.payment_reference == pidx, Order.id != order.id).first()
        if claimed:
            logger.warning("Payment %s already recorded on order %s", pidx, claimed.order_number)
            raise ValueError("Payment does not belong to this order")

        result = PaymentService._client().lookup(pidx)
        status = result.get("status")
        if status != "Completed":
            raise ValueError(f"Payment not completed: {status}")

        if result.get("total_amount") != to_amount_in_paisa(order.total_amount):
            logger.error(
                "Amount mismatch for order %s: gateway %s, order %s",
                order.order_number, result.get("total_amount"), order.total_amount,
            )
            raise ValueError("Paid amount does not match order total")

        return OrderService.mark_paid(order, pidx)
