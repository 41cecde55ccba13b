from decimal import Decimal

import pytest

from src.platform.config.core_setting import Settings


@pytest.mark.unit
class TestSettings:
    def test_pricing_defaults(self, settings: Settings) -> None:
        assert settings.BOOKING_FEE_RATE == Decimal('0.05')
        assert settings.CANCELLATION_FEE_RATE == Decimal('0.10')
        assert settings.CANCELLATION_CUTOFF_HOURS == 24

    def test_cors_origins_from_comma_separated_string(self) -> None:
        settings = Settings(BACKEND_CORS_ORIGINS='http://a.test, http://b.test')

        assert settings.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_async_database_url_uses_asyncpg(self, settings: Settings) -> None:
        assert settings.DATABASE_URL_ASYNC.startswith('postgresql+asyncpg://')
        assert settings.DATABASE_URL_ASYNC.endswith('/tickethub_test_db')
