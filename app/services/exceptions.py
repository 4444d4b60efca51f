# app/services/exceptions.py

"""
PRICING ERRORS

Caller-input errors raised while pricing a cart or placing an order.
Routes turn every one of them into a 400 response carrying the message
verbatim, so the checkout page can show it as-is.
"""


class PricingError(Exception):
    """Base exception for rejected previews and orders."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyCart(PricingError):
    """Raised when no line items were submitted."""

    def __init__(self):
        super().__init__("Cart is empty")


class UnresolvedProduct(PricingError):
    """Raised when a cart line references a product missing from the catalog."""

    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class NoAddress(PricingError):
    """Raised when the user has no shipping address on file."""

    def __init__(self):
        super().__init__("No shipping address found")


class InvalidPromoCode(PricingError):
    """Raised when a code matches no active promo rule."""

    def __init__(self, code: str = ""):
        super().__init__("Invalid promo code")
        self.code = code


class MinSubtotalNotMet(PricingError):
    """Raised when the cart subtotal is below the rule's minimum."""

    def __init__(self, code: str, min_subtotal: float):
        super().__init__(
            f"Promo code requires at least ${format_usd(min_subtotal)} subtotal"
        )
        self.code = code
        self.min_subtotal = min_subtotal


def format_usd(value: float) -> str:
    # 20.0 -> "20", 12.5 -> "12.5"
    if float(value).is_integer():
        return str(int(value))
    return str(value)
