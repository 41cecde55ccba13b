from enum import StrEnum


class OutboxKind(StrEnum):
    EMAIL = 'email'
    REALTIME = 'realtime'


class OutboxStatus(StrEnum):
    PENDING = 'pending'
    DELIVERED = 'delivered'
    DEAD = 'dead'
