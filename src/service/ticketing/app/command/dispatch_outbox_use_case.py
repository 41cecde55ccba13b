from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.storefront_metrics import metrics
from src.service.ticketing.app.dto.storefront_dto import OutboxDispatchResult
from src.service.ticketing.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.ticketing.app.interface.i_email_sender import IEmailSender
from src.service.ticketing.app.interface.i_outbox_repo import IOutboxRepo
from src.service.ticketing.app.interface.i_realtime_publisher import IRealtimePublisher
from src.service.ticketing.app.notification.email_templates import EmailTemplateRenderer
from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage
from src.service.ticketing.domain.enum.notification_type import EmailTemplate
from src.service.ticketing.domain.enum.outbox_status import OutboxKind, OutboxStatus


class DispatchOutboxUseCase:
    """
    Deliver due outbox messages

    Every claimed message is delivered on its own: a failure is recorded on that
    message (attempts, last_error, next_attempt_at with exponential backoff) and
    never stops the rest of the batch or reaches the workflow that enqueued it.
    Reminders for bookings cancelled after they were enqueued are marked
    delivered without being sent.
    """

    def __init__(
        self,
        *,
        outbox_repo: IOutboxRepo,
        booking_query_repo: IBookingQueryRepo,
        email_sender: IEmailSender,
        realtime_publisher: IRealtimePublisher,
        email_renderer: EmailTemplateRenderer,
        settings: Settings,
    ) -> None:
        self.outbox_repo = outbox_repo
        self.booking_query_repo = booking_query_repo
        self.email_sender = email_sender
        self.realtime_publisher = realtime_publisher
        self.email_renderer = email_renderer
        self.settings = settings
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def dispatch_due(
        self, *, now: Optional[datetime] = None, batch_size: Optional[int] = None
    ) -> OutboxDispatchResult:
        now = now or datetime.now(timezone.utc)
        messages = await self.outbox_repo.claim_due(
            now=now,
            limit=batch_size or self.settings.OUTBOX_BATCH_SIZE,
            lease_seconds=self.settings.OUTBOX_CLAIM_LEASE_SECONDS,
        )
        if not messages:
            return OutboxDispatchResult()

        delivered = retried = dead = 0
        with self.tracer.start_as_current_span(
            'use_case.dispatch_outbox', attributes={'outbox.claimed': len(messages)}
        ):
            for message in messages:
                result = await self._dispatch_one(message=message, now=now)
                await self.outbox_repo.save_result(message=result)

                if result.status == OutboxStatus.DELIVERED:
                    delivered += 1
                    outcome = 'delivered'
                elif result.status == OutboxStatus.DEAD:
                    dead += 1
                    outcome = 'dead'
                else:
                    retried += 1
                    outcome = 'retry'
                metrics.record_outbox_delivery(kind=result.kind.value, result=outcome)

        Logger.base.info(
            f'📮 [OUTBOX] Dispatched {len(messages)}: '
            f'delivered={delivered}, retried={retried}, dead={dead}'
        )
        return OutboxDispatchResult(delivered=delivered, retried=retried, dead=dead)

    async def _dispatch_one(self, *, message: OutboxMessage, now: datetime) -> OutboxMessage:
        try:
            if await self._is_stale_reminder(message):
                Logger.base.info(
                    f'🔕 [OUTBOX] Skipped reminder {message.id}, '
                    f'booking {message.payload["booking_id"]} is no longer confirmed'
                )
                return message.mark_delivered(now=now)

            await self._deliver(message)
        except Exception as e:
            failed = message.mark_failed(
                error=f'{type(e).__name__}: {e}',
                max_attempts=self.settings.OUTBOX_MAX_ATTEMPTS,
                retry_base_seconds=self.settings.OUTBOX_RETRY_BASE_SECONDS,
                now=now,
            )
            Logger.base.warning(
                f'⚠️ [OUTBOX] {message.kind.value}:{message.topic} {message.id} failed '
                f'(attempt {failed.attempts}/{self.settings.OUTBOX_MAX_ATTEMPTS}, '
                f'status={failed.status.value}): {e}'
            )
            return failed

        return message.mark_delivered(now=now)

    async def _is_stale_reminder(self, message: OutboxMessage) -> bool:
        if message.kind != OutboxKind.EMAIL or message.topic != EmailTemplate.EVENT_REMINDER:
            return False

        booking = await self.booking_query_repo.get_by_id(
            booking_id=UUID(message.payload['booking_id'])
        )
        return booking is None or booking.is_cancelled

    async def _deliver(self, message: OutboxMessage) -> None:
        if message.kind == OutboxKind.EMAIL:
            email = self.email_renderer.render(
                template=EmailTemplate(message.topic), payload=message.payload
            )
            await self.email_sender.send(message=email)
            return

        await self.realtime_publisher.publish(
            channel=message.topic,
            event=message.payload['event'],
            data=message.payload['data'],
        )
