"""
Booking Command Repository Interface

Each write runs as one conditional transaction: either every row listed below
changes, or nothing does and ``ConflictError`` is raised.
"""

from abc import ABC, abstractmethod
from typing import List

from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.outbox_message_entity import OutboxMessage


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create_booking_atomically(
        self, *, booking: Booking, outbox_messages: List[OutboxMessage]
    ) -> Booking:
        """
        Persist a confirmed booking in a single transaction

        - insert the booking and one booked-seat row per seat, in selection order
        - flip ``is_available`` 1 -> 0 on exactly ``booking.seat_ids`` of ``booking.event_id``
        - decrement the event counter by ``booking.seat_count`` when enough seats remain
        - insert ``outbox_messages``

        Raises:
            ConflictError: a seat was taken or the counter would go negative
        """
        pass

    @abstractmethod
    async def cancel_booking_atomically(
        self, *, booking: Booking, outbox_messages: List[OutboxMessage]
    ) -> Booking:
        """
        Persist a cancellation in a single transaction

        - set status, ``cancelled_at`` and ``refund_amount`` only if not already cancelled
        - flip ``is_available`` back to 1 on every booked seat
        - increment the event counter without exceeding ``total_seats``
        - insert ``outbox_messages``

        Raises:
            ConflictError: the booking was cancelled concurrently
        """
        pass
