from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PaymentState(str, Enum):
    UNINITIATED = "uninitiated"
    AUTHORIZING = "authorizing"
    AUTHORIZED = "authorized"


class GateDecision(str, Enum):
    """What PaymentGate.enter did with the continuation it was given."""

    PASSED = "passed"
    AWAITING_AUTHORIZATION = "awaiting_authorization"


@dataclass
class PaymentSession:
    """Payment status for one workflow session.

    ``client_secret`` is only set while authorization is pending;
    ``authorized`` never goes back to False.
    """

    client_secret: str | None = None
    authorized: bool = False

    @property
    def state(self) -> PaymentState:
        if self.authorized:
            return PaymentState.AUTHORIZED
        if self.client_secret is not None:
            return PaymentState.AUTHORIZING
        return PaymentState.UNINITIATED


class PaymentIntentResponse(BaseModel):
    """Body returned by the payment-intent backend."""

    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(alias="clientSecret", min_length=1)
