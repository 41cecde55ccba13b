"""
Realtime Publisher Implementation

Adapts the in-memory channel broadcaster to ``IRealtimePublisher``. Items carry
``{"event": ..., "data": ...}`` so the SSE controller can forward them as-is.
"""

from typing import Any, AsyncIterator, Dict

from src.platform.event.i_in_memory_broadcaster import IInMemoryEventBroadcaster
from src.platform.logging.loguru_io import Logger


class RealtimePublisherImpl:
    def __init__(self, *, broadcaster: IInMemoryEventBroadcaster) -> None:
        self.broadcaster = broadcaster

    async def publish(self, *, channel: str, event: str, data: Dict[str, Any]) -> int:
        delivered = await self.broadcaster.broadcast(
            channel=channel, event_data={'event': event, 'data': data}
        )
        Logger.base.debug(f'🔔 [REALTIME] {event} on {channel} -> {delivered} subscriber(s)')
        return delivered

    async def subscribe(self, *, channel: str) -> AsyncIterator[Dict[str, Any]]:
        stream = await self.broadcaster.subscribe(channel=channel)
        try:
            async for item in stream:
                yield item
        finally:
            await self.broadcaster.unsubscribe(channel=channel, stream=stream)
