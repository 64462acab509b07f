"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- SimulatedGateway by default, configured from the domain's settings
- FakeGateway in tests
"""

from storefront.config import get_settings
from storefront.payment.gateway.port import PaymentGateway
from storefront.payment.gateway.simulated_adapter import SimulatedGateway

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway."""
    global _current_gateway
    if _current_gateway is None:
        settings = get_settings()
        _current_gateway = SimulatedGateway(
            latency_seconds=settings.payment_gateway_latency_seconds,
            failure_rate=settings.payment_gateway_failure_rate,
        )
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
