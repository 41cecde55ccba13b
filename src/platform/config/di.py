"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.event.in_memory_broadcaster import InMemoryEventBroadcasterImpl
from src.service.ticketing.app.command.dispatch_outbox_use_case import DispatchOutboxUseCase
from src.service.ticketing.app.notification.email_templates import (
    EmailTemplateRenderer,
    MailIdentity,
)
from src.service.ticketing.driven_adapter.notification.mock_email_sender_impl import (
    MockEmailSenderImpl,
)
from src.service.ticketing.driven_adapter.realtime.realtime_publisher_impl import (
    RealtimePublisherImpl,
)
from src.service.ticketing.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from src.service.ticketing.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.ticketing.driven_adapter.repo.outbox_repo_impl import OutboxRepoImpl
from src.service.ticketing.driven_adapter.repo.seat_query_repo_impl import SeatQueryRepoImpl
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager bound to the running event loop)
    database = providers.Singleton(Database)

    # Repositories (stateless - open a session per call through session_factory)
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=database.provided.session
    )
    seat_query_repo = providers.Singleton(
        SeatQueryRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    booking_command_repo = providers.Singleton(
        BookingCommandRepoImpl, session_factory=database.provided.session
    )
    outbox_repo = providers.Singleton(OutboxRepoImpl, session_factory=database.provided.session)

    # Auth service (verifies tokens issued by the identity provider)
    jwt_auth = providers.Singleton(JwtAuth, settings=config_service)

    # Notification delivery
    email_sender = providers.Singleton(MockEmailSenderImpl, debug=config_service.provided.DEBUG)
    email_template_renderer = providers.Singleton(
        EmailTemplateRenderer,
        identity=providers.Factory(MailIdentity.from_settings, config_service),
    )

    # In-process pub/sub for SSE notification streams
    event_broadcaster = providers.Singleton(
        InMemoryEventBroadcasterImpl,
        max_buffer_size=config_service.provided.REALTIME_SUBSCRIBER_BUFFER_SIZE,
    )
    realtime_publisher = providers.Singleton(RealtimePublisherImpl, broadcaster=event_broadcaster)

    # Outbox dispatcher (driven by the background worker, not by HTTP)
    dispatch_outbox_use_case = providers.Singleton(
        DispatchOutboxUseCase,
        outbox_repo=outbox_repo,
        booking_query_repo=booking_query_repo,
        email_sender=email_sender,
        realtime_publisher=realtime_publisher,
        email_renderer=email_template_renderer,
        settings=config_service,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
