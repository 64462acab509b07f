"""Payment retry executor.

Drives the payment gateway for a pending order with a small, bounded number
of attempts. Between attempts it waits ``base * 2^(attempt-1)`` plus a jitter
that is always smaller than that step, so with the defaults (5 attempts,
0.2s base) the total backoff stays under about 3.2s plus gateway latency.

On success the order is confirmed through ``ConfirmPayment``. When every
attempt fails the order stays pending and ``PaymentUnavailable`` is raised,
so the client can try the whole payment again later.
"""

import random
import time
from dataclasses import dataclass

import structlog
from protean.exceptions import InvalidStateError, ProteanException
from protean.utils.globals import current_domain

from storefront.config import get_settings
from storefront.order.order import Order, OrderStatus
from storefront.order.payment import ConfirmPayment
from storefront.payment.gateway import get_gateway
from storefront.payment.gateway.port import PaymentGatewayError

logger = structlog.get_logger(__name__)


class PaymentUnavailable(ProteanException):
    """The payment gateway kept failing for every allowed attempt."""

    def __init__(self, order_id, attempts, last_failure=None):
        self.order_id = str(order_id)
        self.attempts = attempts
        self.last_failure = last_failure
        super().__init__(
            f"Payment for order {self.order_id} failed after {attempts} attempts"
            + (f": {last_failure}" if last_failure else "")
        )

    def __reduce__(self):
        return (self.__class__, (self.order_id, self.attempts, self.last_failure))


@dataclass(frozen=True)
class PaymentReceipt:
    order_id: str
    transaction_id: str
    attempts: int


def backoff_step(attempt: int, base_delay: float) -> float:
    """Deterministic part of the wait after failed ``attempt`` (1-based)."""
    if attempt < 1:
        raise ValueError("attempt numbers start at 1")
    return base_delay * (2 ** (attempt - 1))


def backoff_delay(attempt: int, base_delay: float, max_jitter: float, rng=None) -> float:
    """Wait after failed ``attempt``: the step plus jitter in ``[0, min(max_jitter, step))``."""
    step = backoff_step(attempt, base_delay)
    rng = rng or random
    return step + rng.random() * min(max_jitter, step)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 5
    base_delay: float = 0.2
    max_jitter: float = 0.1

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_jitter < 0:
            raise ValueError("delays cannot be negative")

    @classmethod
    def from_settings(cls, settings=None) -> "RetryPolicy":
        settings = settings or get_settings()
        return cls(
            max_attempts=settings.payment_max_attempts,
            base_delay=settings.payment_base_delay_seconds,
            max_jitter=settings.payment_max_jitter_seconds,
        )

    def delay_for(self, attempt: int, rng=None) -> float:
        return backoff_delay(attempt, self.base_delay, self.max_jitter, rng)

    def worst_case_backoff(self) -> float:
        """Upper bound of the total time spent sleeping between attempts."""
        return sum(
            backoff_step(attempt, self.base_delay) + min(self.max_jitter, backoff_step(attempt, self.base_delay))
            for attempt in range(1, self.max_attempts)
        )


class PaymentRetryExecutor:
    def __init__(self, gateway=None, policy=None, sleep=time.sleep, rng=None) -> None:
        self.gateway = gateway if gateway is not None else get_gateway()
        self.policy = policy if policy is not None else RetryPolicy.from_settings()
        self._sleep = sleep
        self._rng = rng or random.Random()

    def pay(self, order_id) -> PaymentReceipt:
        """Charge a pending order and confirm it.

        Raises ``ObjectNotFoundError`` for an unknown order, ``InvalidStateError``
        without calling the gateway when the order is not pending, and
        ``PaymentUnavailable`` once the attempts are used up.
        """
        order = current_domain.repository_for(Order).get(order_id)
        if order.status != OrderStatus.PENDING.value:
            raise InvalidStateError(f"Cannot pay for order {order.id} in {order.status} state")

        order_id = str(order.id)
        amount = order.total
        last_failure = None

        for attempt in range(1, self.policy.max_attempts + 1):
            try:
                result = self.gateway.charge(order_id=order_id, amount=amount)
            except PaymentGatewayError as exc:
                last_failure = str(exc) or exc.__class__.__name__
            else:
                if result.success:
                    return self._confirm(order_id, amount, result.transaction_id, attempt)
                last_failure = result.failure_reason or "Charge declined"

            if attempt < self.policy.max_attempts:
                delay = self.policy.delay_for(attempt, self._rng)
                logger.warning(
                    "payment_attempt_failed",
                    order_id=order_id,
                    attempt=attempt,
                    max_attempts=self.policy.max_attempts,
                    reason=last_failure,
                    retry_in=round(delay, 3),
                )
                self._sleep(delay)

        logger.error(
            "payment_unavailable",
            order_id=order_id,
            attempts=self.policy.max_attempts,
            reason=last_failure,
        )
        raise PaymentUnavailable(order_id, self.policy.max_attempts, last_failure)

    def _confirm(self, order_id, amount, transaction_id, attempt) -> PaymentReceipt:
        try:
            current_domain.process(
                ConfirmPayment(order_id=order_id, transaction_id=transaction_id),
                asynchronous=False,
            )
        except InvalidStateError:
            # The order left pending while the charge was in flight
            self._refund_after_race(order_id, amount, transaction_id)
            raise

        logger.info("payment_confirmed", order_id=order_id, transaction_id=transaction_id, attempts=attempt)
        return PaymentReceipt(order_id=order_id, transaction_id=transaction_id, attempts=attempt)

    def _refund_after_race(self, order_id, amount, transaction_id) -> bool:
        """Give back a charge whose order was settled meanwhile.

        Uses the same attempts and backoff as the charge. A refund that never
        goes through is logged for manual follow-up and does not replace the
        state error the caller is about to see.
        """
        last_failure = None
        for attempt in range(1, self.policy.max_attempts + 1):
            try:
                result = self.gateway.refund(
                    transaction_id=transaction_id,
                    amount=amount,
                    reason="Order no longer pending",
                )
            except PaymentGatewayError as exc:
                last_failure = str(exc) or exc.__class__.__name__
            else:
                if result.success:
                    logger.warning(
                        "payment_refunded_after_race",
                        order_id=order_id,
                        transaction_id=transaction_id,
                        refund_id=result.refund_id,
                    )
                    return True
                last_failure = result.failure_reason or "Refund declined"

            if attempt < self.policy.max_attempts:
                self._sleep(self.policy.delay_for(attempt, self._rng))

        logger.error(
            "payment_refund_failed",
            order_id=order_id,
            transaction_id=transaction_id,
            attempts=self.policy.max_attempts,
            reason=last_failure,
        )
        return False
