"""Application settings read from the domain's ``[custom]`` config table.

``domain.toml`` exposes each value as an environment-overridable string
(``${VAR|default}``), so values are coerced here.
"""

from dataclasses import dataclass

from storefront.domain import storefront


@dataclass(frozen=True)
class Settings:
    payment_max_attempts: int = 5
    payment_base_delay_seconds: float = 0.2
    payment_max_jitter_seconds: float = 0.1
    payment_gateway_latency_seconds: float = 0.1
    payment_gateway_failure_rate: float = 0.1
    cache_ttl_seconds: float = 60.0
    search_result_limit: int = 20

    @classmethod
    def from_domain(cls, domain) -> "Settings":
        defaults = cls()
        return cls(
            payment_max_attempts=int(getattr(domain, "PAYMENT_MAX_ATTEMPTS", defaults.payment_max_attempts)),
            payment_base_delay_seconds=float(
                getattr(domain, "PAYMENT_BASE_DELAY_SECONDS", defaults.payment_base_delay_seconds)
            ),
            payment_max_jitter_seconds=float(
                getattr(domain, "PAYMENT_MAX_JITTER_SECONDS", defaults.payment_max_jitter_seconds)
            ),
            payment_gateway_latency_seconds=float(
                getattr(domain, "PAYMENT_GATEWAY_LATENCY_SECONDS", defaults.payment_gateway_latency_seconds)
            ),
            payment_gateway_failure_rate=float(
                getattr(domain, "PAYMENT_GATEWAY_FAILURE_RATE", defaults.payment_gateway_failure_rate)
            ),
            cache_ttl_seconds=float(getattr(domain, "CACHE_TTL_SECONDS", defaults.cache_ttl_seconds)),
            search_result_limit=int(getattr(domain, "SEARCH_RESULT_LIMIT", defaults.search_result_limit)),
        )


def get_settings() -> Settings:
    return Settings.from_domain(storefront)
