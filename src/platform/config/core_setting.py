from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'TicketHub Storefront'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Database
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'tickethub'
    POSTGRES_PORT: int = 5432

    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Security (tokens are issued by the identity provider, verified here)
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    SESSION_COOKIE_NAME: str = 'tickethub_session'

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # Pricing rules
    BOOKING_FEE_RATE: Decimal = Decimal('0.05')
    CANCELLATION_FEE_RATE: Decimal = Decimal('0.10')
    CANCELLATION_CUTOFF_HOURS: int = 24
    EVENT_LIST_DEFAULT_LIMIT: int = 20

    # Mail
    MAIL_BRAND: str = 'TicketHub'
    MAIL_SUPPORT_ADDRESS: str = 'support@tickethub.com'
    MAIL_BOOKINGS_SENDER: str = 'bookings@tickethub.com'
    MAIL_REMINDERS_SENDER: str = 'reminders@tickethub.com'
    MAIL_CANCELLATIONS_SENDER: str = 'cancellations@tickethub.com'
    MAIL_WELCOME_SENDER: str = 'welcome@tickethub.com'

    # Outbox delivery
    OUTBOX_POLL_INTERVAL_SECONDS: float = 2.0
    OUTBOX_BATCH_SIZE: int = 50
    OUTBOX_MAX_ATTEMPTS: int = 5
    OUTBOX_RETRY_BASE_SECONDS: float = 5.0
    OUTBOX_CLAIM_LEASE_SECONDS: float = 60.0

    # Reminders
    REMINDER_SCAN_INTERVAL_SECONDS: float = 300.0

    # Real-time
    REALTIME_NOTIFICATION_CHANNEL: str = 'user-notifications'
    REALTIME_NOTIFICATION_EVENT: str = 'new_notification'
    REALTIME_SUBSCRIBER_BUFFER_SIZE: int = 10

    # Tracing
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None
    OTEL_CONSOLE_EXPORT: bool = False


settings = Settings()  # type: ignore
