from outpaint.payment.base import BasePaymentConfirmer
from outpaint.payment.factory import PaymentConfirmerFactory
from outpaint.payment.gate import PaymentGate
from outpaint.payment.models import GateDecision, PaymentState

__all__ = [
    "BasePaymentConfirmer",
    "GateDecision",
    "PaymentConfirmerFactory",
    "PaymentGate",
    "PaymentState",
]
