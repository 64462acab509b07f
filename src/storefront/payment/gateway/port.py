"""Payment gateway port (abstract interface).

The order flow only needs two capabilities from a payment provider: capture a
charge for an order and give it back. Adapters may report a failure either by
returning an unsuccessful result or by raising ``PaymentGatewayError``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


class PaymentGatewayError(Exception):
    """The gateway could not be reached or answered with an error."""


@dataclass(frozen=True)
class ChargeResult:
    """Result of a payment charge attempt."""

    success: bool
    transaction_id: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class RefundResult:
    """Result of a refund attempt."""

    success: bool
    refund_id: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def charge(self, order_id: str, amount: Decimal) -> ChargeResult:
        """Charge ``amount`` for ``order_id``."""
        ...

    @abstractmethod
    def refund(self, transaction_id: str, amount: Decimal, reason: str) -> RefundResult:
        """Refund a previously captured charge."""
        ...
