"""Scripted payment gateway for tests.

Outcomes are consumed in order from ``script``; once it runs out, every call
follows ``should_succeed``. A scripted entry is either ``True`` (success),
``False`` (declined) or an exception instance to raise.
"""

from decimal import Decimal
from uuid import uuid4

from storefront.payment.gateway.port import ChargeResult, PaymentGateway, RefundResult


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.script: list = []
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def queue(self, *outcomes) -> None:
        self.script.extend(outcomes)

    def _next_outcome(self):
        if self.script:
            outcome = self.script.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        return self.should_succeed

    @property
    def charges(self) -> list[dict]:
        return [call for call in self.calls if call["method"] == "charge"]

    @property
    def refunds(self) -> list[dict]:
        return [call for call in self.calls if call["method"] == "refund"]

    def charge(self, order_id: str, amount: Decimal) -> ChargeResult:
        self.calls.append({"method": "charge", "order_id": order_id, "amount": amount})

        if self._next_outcome():
            return ChargeResult(success=True, transaction_id=f"fake_txn_{uuid4().hex[:12]}")
        return ChargeResult(success=False, failure_reason=self.failure_reason)

    def refund(self, transaction_id: str, amount: Decimal, reason: str) -> RefundResult:
        self.calls.append(
            {
                "method": "refund",
                "transaction_id": transaction_id,
                "amount": amount,
                "reason": reason,
            }
        )
        return RefundResult(success=True, refund_id=f"fake_ref_{uuid4().hex[:12]}")
