from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class DomainEvent(Protocol):
    """
    Minimal contract of every booking lifecycle event

    - aggregate_id: id of the booking the event belongs to
    - occurred_at: when the state change was committed
    """

    @property
    def aggregate_id(self) -> UUID: ...

    @property
    def occurred_at(self) -> datetime: ...
