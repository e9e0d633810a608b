"""Pay-once gate in front of image processing.

States move ``UNINITIATED -> AUTHORIZING -> AUTHORIZED`` and never back
within a session. The gate holds the work waiting behind it as a
continuation and runs it only after authorization.
"""

from collections.abc import Callable

from outpaint.logging.logger import Log
from outpaint.payment.base import BasePaymentConfirmer
from outpaint.payment.exceptions import PaymentAuthorizationError
from outpaint.payment.intent_client import PaymentIntentClient
from outpaint.payment.models import GateDecision, PaymentSession, PaymentState

Continuation = Callable[[], None]


class PaymentGate:
    """Requests payment once per session, then lets every attempt through."""

    def __init__(
        self,
        *,
        intent_client: PaymentIntentClient,
        confirmer: BasePaymentConfirmer,
        amount: int,
    ) -> None:
        self._intent_client = intent_client
        self._confirmer = confirmer
        self._amount = amount
        self._session = PaymentSession()
        self._continuation: Continuation | None = None

    @property
    def state(self) -> PaymentState:
        return self._session.state

    @property
    def authorized(self) -> bool:
        return self._session.authorized

    @property
    def client_secret(self) -> str | None:
        return self._session.client_secret

    @property
    def amount(self) -> int:
        return self._amount

    def enter(self, continuation: Continuation) -> GateDecision:
        """Run ``continuation`` now if paid, otherwise park it behind authorization.

        In ``UNINITIATED`` a payment intent is created and the gate moves to
        ``AUTHORIZING``. In ``AUTHORIZING`` the pending continuation is replaced
        and the existing client secret is reused, so at most one intent is ever
        outstanding.

        Raises:
            PaymentIntentError: if the intent cannot be created; the gate stays
                in ``UNINITIATED``.
        """
        state = self.state
        if state is PaymentState.AUTHORIZED:
            continuation()
            return GateDecision.PASSED

        if state is PaymentState.UNINITIATED:
            client_secret = self._intent_client.create(self._amount)
            self._session.client_secret = client_secret
            Log.info(f"Payment intent created for {self._amount}, awaiting authorization")
        else:
            Log.info("Payment already pending, reusing outstanding intent")

        self._continuation = continuation
        return GateDecision.AWAITING_AUTHORIZATION

    def confirm(self) -> None:
        """Confirm the pending payment with the configured provider.

        On success the parked continuation runs. On failure the gate stays in
        ``AUTHORIZING`` and can be confirmed again.

        Raises:
            PaymentAuthorizationError: with the provider's message.
            RuntimeError: if no authorization is pending.
        """
        client_secret = self._require_pending()
        self._confirmer.confirm(client_secret)
        self.authorization_succeeded()

    def authorization_succeeded(self) -> None:
        """Record a successful authorization and run the parked continuation.

        Use directly when the confirmation widget runs outside this process.
        """
        self._require_pending()
        self._session.authorized = True
        self._session.client_secret = None
        continuation, self._continuation = self._continuation, None
        Log.info("Payment authorized for this session")
        if continuation is not None:
            continuation()

    def replace_continuation(self, continuation: Continuation) -> None:
        """Swap the work parked behind the pending authorization.

        The outstanding intent and its client secret are kept.

        Raises:
            RuntimeError: if no authorization is pending.
        """
        self._require_pending()
        self._continuation = continuation

    def authorization_failed(self, message: str) -> PaymentAuthorizationError:
        """Record a declined authorization reported by an external widget.

        The gate stays in ``AUTHORIZING``. Returns the error to surface.
        """
        self._require_pending()
        Log.warning(f"Payment authorization failed: {message}")
        return PaymentAuthorizationError(message)

    def _require_pending(self) -> str:
        client_secret = self._session.client_secret
        if self.state is not PaymentState.AUTHORIZING or client_secret is None:
            raise RuntimeError(f"No payment authorization pending (state={self.state.value})")
        return client_secret
