"""
Outbox Repository Implementation

Messages are claimed with ``FOR UPDATE SKIP LOCKED`` so several dispatchers can
poll the same table without delivering a message twice within one lease.
"""

from datetime import datetime, timedelta
from typing import Any, AsyncContextManager, Callable, Dict, List
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import MalformedRecordError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_outbox_repo import IOutboxRepo
from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage
from src.service.ticketing.domain.enum.outbox_status import OutboxStatus
from src.service.ticketing.driven_adapter.model.outbox_message_model import OutboxMessageModel
from src.service.ticketing.driven_adapter.repo.record_dto import (
    OutboxMessageRecord,
    validate_record,
)


def outbox_row_values(message: OutboxMessage) -> Dict[str, Any]:
    return {
        'id': message.id,
        'kind': message.kind.value,
        'topic': message.topic,
        'payload': message.payload,
        'dedupe_key': message.dedupe_key,
        'status': message.status.value,
        'attempts': message.attempts,
        'next_attempt_at': message.next_attempt_at,
        'last_error': message.last_error,
        'created_at': message.created_at or func.now(),
        'delivered_at': message.delivered_at,
    }


def insert_outbox_messages_stmt(messages: List[OutboxMessage]):
    """INSERT ... ON CONFLICT (dedupe_key) DO NOTHING RETURNING id"""
    return (
        insert(OutboxMessageModel)
        .values([outbox_row_values(message) for message in messages])
        .on_conflict_do_nothing(index_elements=['dedupe_key'])
        .returning(OutboxMessageModel.id)
    )


class OutboxRepoImpl(IOutboxRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _to_entity(model: OutboxMessageModel) -> OutboxMessage:
        return validate_record(OutboxMessageRecord, model).to_entity()

    @Logger.io
    async def enqueue(self, *, messages: List[OutboxMessage]) -> int:
        if not messages:
            return 0

        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(insert_outbox_messages_stmt(messages))
                inserted = len(result.all())

        skipped = len(messages) - inserted
        if skipped:
            Logger.base.info(f'📮 [OUTBOX] Skipped {skipped} duplicate message(s)')
        return inserted

    @Logger.io
    async def claim_due(
        self, *, now: datetime, limit: int, lease_seconds: float
    ) -> List[OutboxMessage]:
        async with self.session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    select(OutboxMessageModel)
                    .where(
                        OutboxMessageModel.status == OutboxStatus.PENDING.value,
                        or_(
                            OutboxMessageModel.next_attempt_at.is_(None),
                            OutboxMessageModel.next_attempt_at <= now,
                        ),
                    )
                    .order_by(OutboxMessageModel.next_attempt_at, OutboxMessageModel.created_at)
                    .limit(limit)
                    .with_for_update(skip_locked=True)
                )
                messages: List[OutboxMessage] = []
                for model in result.scalars().all():
                    try:
                        messages.append(self._to_entity(model))
                    except MalformedRecordError as e:
                        await self._bury(session, message_id=model.id, error=e.message)

                if messages:
                    await session.execute(
                        update(OutboxMessageModel)
                        .where(OutboxMessageModel.id.in_([message.id for message in messages]))
                        .values(next_attempt_at=now + timedelta(seconds=lease_seconds))
                    )

        return messages

    @staticmethod
    async def _bury(session: AsyncSession, *, message_id: UUID, error: str) -> None:
        """Dead-letter a row that cannot be read back into an ``OutboxMessage``"""
        await session.execute(
            update(OutboxMessageModel)
            .where(OutboxMessageModel.id == message_id)
            .values(status=OutboxStatus.DEAD.value, next_attempt_at=None, last_error=error)
        )
        Logger.base.warning(f'🪦 [OUTBOX] Dead-lettered unreadable message {message_id}: {error}')

    @Logger.io
    async def save_result(self, *, message: OutboxMessage) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                await session.execute(
                    update(OutboxMessageModel)
                    .where(OutboxMessageModel.id == message.id)
                    .values(
                        status=message.status.value,
                        attempts=message.attempts,
                        next_attempt_at=message.next_attempt_at,
                        last_error=message.last_error,
                        delivered_at=message.delivered_at,
                    )
                )
