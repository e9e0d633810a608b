from abc import ABC, abstractmethod


class BasePaymentConfirmer(ABC):
    """Contract for payment-provider confirmation adapters."""

    @abstractmethod
    def confirm(self, client_secret: str) -> None:
        """Confirm the payment identified by ``client_secret``.

        Returns normally only when the payment is authorized.

        Raises:
            PaymentAuthorizationError: with the provider's message when the
                payment is declined or cannot be confirmed.
        """
