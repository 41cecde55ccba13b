"""
In-memory Channel Broadcaster Implementation

Singleton broadcaster that carries outbox real-time messages to SSE endpoints.
"""

from typing import Dict, List

from anyio import BrokenResourceError, WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.logging.loguru_io import Logger


class InMemoryEventBroadcasterImpl:
    """
    In-memory pub/sub keyed by channel name

    - Each channel holds a list of (send_stream, receive_stream) pairs
    - Stream buffer is bounded; a full buffer drops the event for that subscriber
    - Empty channels are removed on unsubscribe
    """

    def __init__(self, *, max_buffer_size: int = 10) -> None:
        self._max_buffer_size = max_buffer_size
        self._subscribers: Dict[
            str, List[tuple[MemoryObjectSendStream[dict], MemoryObjectReceiveStream[dict]]]
        ] = {}

    def subscriber_count(self, *, channel: str) -> int:
        return len(self._subscribers.get(channel, []))

    async def subscribe(self, *, channel: str) -> MemoryObjectReceiveStream[dict]:
        send_stream, receive_stream = create_memory_object_stream[dict](
            max_buffer_size=self._max_buffer_size
        )
        self._subscribers.setdefault(channel, []).append((send_stream, receive_stream))

        Logger.base.debug(
            f'📡 [BROADCASTER] Subscribed to {channel} '
            f'(total subscribers: {len(self._subscribers[channel])})'
        )
        return receive_stream

    async def broadcast(self, *, channel: str, event_data: dict) -> int:
        subscribers = self._subscribers.get(channel)
        if not subscribers:
            Logger.base.debug(f'📡 [BROADCASTER] No subscribers on {channel}')
            return 0

        delivered = 0
        dropped = 0
        for send_stream, _ in list(subscribers):
            try:
                send_stream.send_nowait(event_data)
                delivered += 1
            except WouldBlock:
                dropped += 1
                Logger.base.warning(
                    f'⚠️ [BROADCASTER] Stream full on {channel}, '
                    f'dropping event (event={event_data.get("event")})'
                )
            except BrokenResourceError:
                # Receiver went away without unsubscribing
                dropped += 1

        Logger.base.info(
            f'📡 [BROADCASTER] Broadcast to {channel}: delivered={delivered}, dropped={dropped}'
        )
        return delivered

    async def unsubscribe(self, *, channel: str, stream: MemoryObjectReceiveStream[dict]) -> None:
        subscribers = self._subscribers.get(channel)
        if subscribers is None:
            return

        for i, (send_stream, receive_stream) in enumerate(subscribers):
            if receive_stream is stream:
                await send_stream.aclose()
                await receive_stream.aclose()
                subscribers.pop(i)
                Logger.base.debug(
                    f'📡 [BROADCASTER] Unsubscribed from {channel} '
                    f'(remaining: {len(subscribers)})'
                )
                break

        if not subscribers:
            del self._subscribers[channel]
            Logger.base.debug(f'📡 [BROADCASTER] Cleaned up empty channel {channel}')
