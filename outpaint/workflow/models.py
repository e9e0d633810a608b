from dataclasses import dataclass
from enum import Enum

from outpaint.imaging.models import NormalizedImage
from outpaint.results.models import ProcessingResult


class OutcomeStatus(str, Enum):
    OK = "ok"
    AWAITING_PAYMENT = "awaiting_payment"
    FAILED = "failed"


@dataclass(frozen=True)
class AttemptOutcome:
    """What a workflow call hands back to the UI."""

    status: OutcomeStatus
    result: ProcessingResult | None = None
    image: NormalizedImage | None = None
    client_secret: str | None = None
    error: str | None = None
    error_kind: str | None = None
    retryable: bool = False

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK
