from outpaint.exceptions import OutpaintError


class PaymentError(OutpaintError):
    """Base exception for payment failures."""


class PaymentIntentError(PaymentError):
    """Raised when the backend cannot create a payment intent."""

    default_message = "Failed to initialize payment"


class PaymentAuthorizationError(PaymentError):
    """Raised when the provider declines or errors during confirmation.

    The message is the provider's text, passed through verbatim.
    """

    default_message = "Payment failed"
