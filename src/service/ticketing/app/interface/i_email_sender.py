from typing import Protocol

from src.service.ticketing.domain.value_object.email_message import EmailMessage


class IEmailSender(Protocol):
    """Outbound mail transport"""

    async def send(self, *, message: EmailMessage) -> str:
        """
        Send one rendered email

        Returns:
            Transport message id

        Raises:
            Any exception on delivery failure; the outbox dispatcher records and retries it
        """
        ...
