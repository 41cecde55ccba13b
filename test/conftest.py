"""
Test Configuration and Fixtures

This module provides:
- Test environment variables, set before any application module reads settings
- Shared settings, session and clock fixtures for the unit suites

Architecture:
- Unit tests (test/**/unit/): Repositories and senders are AsyncMocks
- HTTP tests: FastAPI TestClient with dependency overrides, no lifespan workers
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are built at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    os.environ['POSTGRES_DB'] = 'tickethub_test_db'
    os.environ.setdefault('SECRET_KEY', 'test_secret_key_for_unit_tests')

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402

from src.platform.config.core_setting import Settings  # noqa: E402
from src.service.ticketing.domain.enum.user_role import UserRole  # noqa: E402
from src.service.ticketing.domain.value_object.session_context import (  # noqa: E402
    SessionContext,
)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def customer_session() -> SessionContext:
    return SessionContext(user_id='user-1', email='buyer@example.com', name='Alex Rivera')


@pytest.fixture
def other_customer_session() -> SessionContext:
    return SessionContext(user_id='user-2', email='other@example.com', name='Sam Lee')


@pytest.fixture
def admin_session() -> SessionContext:
    return SessionContext(
        user_id='admin-1', email='admin@example.com', name='Admin', role=UserRole.ADMIN
    )
