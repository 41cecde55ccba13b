from datetime import datetime
from typing import Any, Dict, Optional

import attrs
from uuid_utils.compat import uuid7

from src.service.ticketing.domain.enum.notification_type import NotificationType


@attrs.define(frozen=True)
class UserNotification:
    """Entry shown in the notification center and pushed over the SSE stream"""

    type: NotificationType
    title: str
    message: str
    user_id: str
    timestamp: datetime
    booking_id: Optional[str] = None
    event_id: Optional[int] = None
    id: str = attrs.field(factory=lambda: str(uuid7()))
    read: bool = False

    def to_payload(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type.value,
            'title': self.title,
            'message': self.message,
            'timestamp': self.timestamp.isoformat(),
            'read': self.read,
            'bookingId': self.booking_id,
            'eventId': self.event_id,
            'userId': self.user_id,
        }
