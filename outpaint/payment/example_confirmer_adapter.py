"""Example payment confirmer.

No network calls. Approves every client secret, which makes it suitable for
local development against a stub backend and for tests.
"""

from outpaint.logging.logger import Log
from outpaint.payment.base import BasePaymentConfirmer


class ExampleConfirmerAdapter(BasePaymentConfirmer):
    def confirm(self, client_secret: str) -> None:
        Log.debug(f"Example confirmer approved {client_secret[:8]}...")
