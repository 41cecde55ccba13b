from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.service.ticketing.domain.enum.notification_type import EmailTemplate
from src.service.ticketing.domain.enum.outbox_status import OutboxKind, OutboxStatus


MAX_ERROR_LENGTH = 1000


@attrs.define
class OutboxMessage:
    """
    Durable side-effect request

    Written in the same transaction as the business change and delivered later
    by the outbox dispatcher. Email messages carry the template name as ``topic``
    and the template context as ``payload``; realtime messages carry the channel
    as ``topic`` and ``{"event": ..., "data": ...}`` as ``payload``.
    """

    id: UUID
    kind: OutboxKind
    topic: str
    payload: Dict[str, Any]
    dedupe_key: Optional[str] = None
    status: OutboxStatus = OutboxStatus.PENDING
    attempts: int = 0
    next_attempt_at: Optional[datetime] = None
    last_error: Optional[str] = None
    created_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None

    @classmethod
    def email(
        cls,
        *,
        template: EmailTemplate,
        context: Dict[str, Any],
        now: datetime,
        dedupe_key: Optional[str] = None,
    ) -> 'OutboxMessage':
        return cls(
            id=uuid7(),
            kind=OutboxKind.EMAIL,
            topic=template.value,
            payload=context,
            dedupe_key=dedupe_key,
            next_attempt_at=now,
            created_at=now,
        )

    @classmethod
    def realtime(
        cls,
        *,
        channel: str,
        event: str,
        data: Dict[str, Any],
        now: datetime,
    ) -> 'OutboxMessage':
        return cls(
            id=uuid7(),
            kind=OutboxKind.REALTIME,
            topic=channel,
            payload={'event': event, 'data': data},
            next_attempt_at=now,
            created_at=now,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == OutboxStatus.PENDING

    def is_due(self, now: datetime) -> bool:
        return self.is_pending and (self.next_attempt_at is None or self.next_attempt_at <= now)

    def mark_delivered(self, *, now: Optional[datetime] = None) -> 'OutboxMessage':
        now = now or datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=OutboxStatus.DELIVERED,
            attempts=self.attempts + 1,
            delivered_at=now,
            last_error=None,
        )

    def mark_failed(
        self,
        *,
        error: str,
        max_attempts: int,
        retry_base_seconds: float,
        now: Optional[datetime] = None,
    ) -> 'OutboxMessage':
        """
        Record a failed delivery attempt

        The next attempt is scheduled ``retry_base_seconds * 2 ** (attempts - 1)`` later.
        Once ``attempts`` reaches ``max_attempts`` the message is dead and never retried.
        """
        now = now or datetime.now(timezone.utc)
        attempts = self.attempts + 1
        if attempts >= max_attempts:
            return attrs.evolve(
                self,
                status=OutboxStatus.DEAD,
                attempts=attempts,
                last_error=error[:MAX_ERROR_LENGTH],
                next_attempt_at=None,
            )

        delay = timedelta(seconds=retry_base_seconds * 2 ** (attempts - 1))
        return attrs.evolve(
            self,
            attempts=attempts,
            last_error=error[:MAX_ERROR_LENGTH],
            next_attempt_at=now + delay,
        )
