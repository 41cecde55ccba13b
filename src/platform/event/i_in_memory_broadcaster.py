"""
In-memory Channel Broadcaster Interface

Fan-out of real-time notifications to SSE endpoints within the same process.
"""

from typing import Protocol

from anyio.streams.memory import MemoryObjectReceiveStream


class IInMemoryEventBroadcaster(Protocol):
    async def subscribe(self, *, channel: str) -> MemoryObjectReceiveStream[dict]:
        """Register a bounded receive stream on ``channel``."""
        ...

    async def broadcast(self, *, channel: str, event_data: dict) -> int:
        """
        Send ``event_data`` to every subscriber of ``channel``.

        Returns the number of subscribers that accepted the message. Full
        subscriber buffers drop the message instead of blocking the publisher.
        """
        ...

    async def unsubscribe(self, *, channel: str, stream: MemoryObjectReceiveStream[dict]) -> None:
        """Close and forget ``stream``. Unknown channels and streams are ignored."""
        ...
