"""Mock email sender that logs messages instead of delivering them over SMTP."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.value_object.email_message import EmailMessage


class MockEmailSenderImpl:
    def __init__(self, *, debug: bool = True) -> None:
        self.debug = debug
        self.sent_emails: List[Dict[str, Any]] = []  # inspected by tests

    @Logger.io
    async def send(self, *, message: EmailMessage) -> str:
        message_id = f'mock_{uuid7()}'
        self.sent_emails.append(
            {
                'id': message_id,
                'message': message,
                'sent_at': datetime.now(timezone.utc),
            }
        )

        Logger.base.info(
            f'📧 [MAIL] Sent "{message.subject}" to {message.to} '
            f'from {message.sender} (id={message_id})'
        )
        if self.debug:
            Logger.base.debug(f'📧 [MAIL] Body:\n{message.text}')

        return message_id
