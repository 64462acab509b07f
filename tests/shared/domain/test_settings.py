from types import SimpleNamespace

import pytest
from storefront.config import Settings, get_settings


class TestSettings:
    def test_defaults_when_domain_has_no_overrides(self):
        assert Settings.from_domain(SimpleNamespace()) == Settings()

    def test_string_values_are_coerced(self):
        domain = SimpleNamespace(PAYMENT_MAX_ATTEMPTS="3", CACHE_TTL_SECONDS="15", SEARCH_RESULT_LIMIT="5")

        settings = Settings.from_domain(domain)

        assert settings.payment_max_attempts == 3
        assert settings.cache_ttl_seconds == 15.0
        assert settings.search_result_limit == 5

    def test_test_environment_overlay(self):
        settings = get_settings()

        assert settings.payment_max_attempts == 5
        assert settings.payment_base_delay_seconds == pytest.approx(0.001)
        assert settings.payment_gateway_failure_rate == 0
