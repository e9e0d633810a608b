from outpaint.config.settings import Settings
from outpaint.payment.base import BasePaymentConfirmer
from outpaint.payment.example_confirmer_adapter import ExampleConfirmerAdapter
from outpaint.payment.stripe_confirmer_adapter import StripeConfirmerAdapter


class PaymentConfirmerFactory:
    """Creates the configured payment confirmation adapter."""

    PROVIDERS = ("example", "stripe")

    @classmethod
    def create(cls, settings: Settings) -> BasePaymentConfirmer:
        provider = settings.payment_provider.lower()
        if provider == "example":
            return ExampleConfirmerAdapter()
        if provider == "stripe":
            return StripeConfirmerAdapter(
                api_key=settings.stripe_secret_key,
                payment_method=settings.stripe_payment_method,
                return_url=settings.stripe_return_url,
            )
        raise ValueError(
            f"Unknown payment provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
