"""Simulated payment provider used outside tests.

Each call takes a fixed latency and fails at a configurable rate, standing in
for a slow, unreliable remote service.
"""

import random
import time
from decimal import Decimal

from storefront.payment.gateway.port import ChargeResult, PaymentGateway, PaymentGatewayError, RefundResult


class SimulatedGateway(PaymentGateway):
    def __init__(self, latency_seconds: float = 0.1, failure_rate: float = 0.1, rng=None, sleep=time.sleep) -> None:
        self.latency_seconds = latency_seconds
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()
        self._sleep = sleep

    def _call(self) -> None:
        if self.latency_seconds > 0:
            self._sleep(self.latency_seconds)
        if self._rng.random() < self.failure_rate:
            raise PaymentGatewayError("Payment service unavailable")

    def charge(self, order_id: str, amount: Decimal) -> ChargeResult:  # noqa: ARG002
        self._call()
        return ChargeResult(success=True, transaction_id=f"TXN-{int(time.time() * 1000)}")

    def refund(self, transaction_id: str, amount: Decimal, reason: str) -> RefundResult:  # noqa: ARG002
        self._call()
        return RefundResult(success=True, refund_id=f"RFD-{int(time.time() * 1000)}")
