from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage


class IOutboxRepo(ABC):
    @abstractmethod
    async def enqueue(self, *, messages: List[OutboxMessage]) -> int:
        """
        Insert messages on their own

        Messages whose ``dedupe_key`` already exists are skipped silently.

        Returns:
            Number of messages actually inserted
        """
        pass

    @abstractmethod
    async def claim_due(
        self, *, now: datetime, limit: int, lease_seconds: float
    ) -> List[OutboxMessage]:
        """
        Claim up to ``limit`` pending messages with ``next_attempt_at <= now``

        Rows are locked with ``FOR UPDATE SKIP LOCKED`` and their ``next_attempt_at``
        is pushed ``lease_seconds`` ahead, so a concurrent dispatcher skips them.
        Rows that fail validation are marked ``dead`` with ``last_error`` and are
        not returned.
        """
        pass

    @abstractmethod
    async def save_result(self, *, message: OutboxMessage) -> None:
        """Persist status, attempts, schedule and error of a delivered or failed message"""
        pass
