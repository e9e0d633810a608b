import httpx
from pydantic import ValidationError

from outpaint.logging.logger import Log
from outpaint.payment.exceptions import PaymentIntentError
from outpaint.payment.models import PaymentIntentResponse


class PaymentIntentClient:
    """Requests payment intents from the application backend."""

    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: int = 30,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def create(self, amount: int) -> str:
        """Create a payment intent for ``amount`` minor currency units.

        Returns:
            The intent's client secret.

        Raises:
            PaymentIntentError: on network failure, non-2xx status or a body
                without a client secret.
        """
        try:
            response = self._client.post(self._url, json={"amount": amount})
        except httpx.HTTPError as exc:
            raise PaymentIntentError() from exc

        if not response.is_success:
            Log.warning(
                f"Payment intent request failed: {response.status_code} {response.reason_phrase}"
            )
            raise PaymentIntentError()
        try:
            body = PaymentIntentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise PaymentIntentError() from exc
        return body.client_secret
