class NotFoundError(ValueError):
    """Requested row does not exist or is not visible to the caller"""


class ConflictError(ValueError):
    """Row would violate a uniqueness rule"""


class PaymentGatewayError(Exception):
    """Payment gateway rejected the request or could not be reached"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)
