import stripe

from outpaint.payment.base import BasePaymentConfirmer
from outpaint.payment.exceptions import PaymentAuthorizationError

_AUTHORIZED_STATUSES = frozenset({"succeeded", "processing", "requires_capture"})


def intent_id_from_client_secret(client_secret: str) -> str:
    """``pi_123_secret_abc`` -> ``pi_123``."""
    intent_id, sep, _ = client_secret.partition("_secret_")
    if not sep or not intent_id:
        raise PaymentAuthorizationError("Invalid payment client secret")
    return intent_id


class StripeConfirmerAdapter(BasePaymentConfirmer):
    """Confirms Stripe PaymentIntents with a fixed payment method."""

    def __init__(
        self,
        *,
        api_key: str,
        payment_method: str,
        return_url: str = "",
    ) -> None:
        if not api_key:
            raise ValueError("stripe_secret_key is required for payment_provider=stripe")
        self._api_key = api_key
        self._payment_method = payment_method
        self._return_url = return_url

    def confirm(self, client_secret: str) -> None:
        intent_id = intent_id_from_client_secret(client_secret)
        params: dict[str, str] = {"payment_method": self._payment_method}
        if self._return_url:
            params["return_url"] = self._return_url
        try:
            intent = stripe.PaymentIntent.confirm(intent_id, api_key=self._api_key, **params)
        except stripe.StripeError as exc:
            raise PaymentAuthorizationError(exc.user_message or str(exc)) from exc

        if intent.status not in _AUTHORIZED_STATUSES:
            raise PaymentAuthorizationError(f"Payment not completed ({intent.status})")
