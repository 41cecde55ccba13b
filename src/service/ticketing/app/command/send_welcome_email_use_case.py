from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_outbox_repo import IOutboxRepo
from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage
from src.service.ticketing.domain.enum.notification_type import EmailTemplate
from src.service.ticketing.domain.value_object.session_context import SessionContext


class SendWelcomeEmailUseCase:
    def __init__(self, *, outbox_repo: IOutboxRepo) -> None:
        self.outbox_repo = outbox_repo

    @classmethod
    @inject
    def depends(
        cls, outbox_repo: IOutboxRepo = Depends(Provide[Container.outbox_repo])
    ) -> Self:
        return cls(outbox_repo=outbox_repo)

    @Logger.io
    async def send_welcome(
        self, *, session: SessionContext, now: Optional[datetime] = None
    ) -> bool:
        """Enqueue the welcome email once per user; returns False if it was already sent"""
        now = now or datetime.now(timezone.utc)
        message = OutboxMessage.email(
            template=EmailTemplate.WELCOME,
            context={
                'user_email': session.email,
                'user_name': session.name or session.email.split('@')[0],
            },
            dedupe_key=f'welcome:{session.user_id}',
            now=now,
        )
        enqueued = await self.outbox_repo.enqueue(messages=[message]) == 1
        if enqueued:
            Logger.base.info(f'🎉 [WELCOME] Welcome email enqueued for {session.user_id}')
        return enqueued
