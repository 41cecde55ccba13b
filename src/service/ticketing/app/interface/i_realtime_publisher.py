"""
Realtime Publisher Interface

Abstraction for pushing notification events to connected browsers.

Follows Dependency Inversion Principle:
- High-level modules (Use Cases) depend on this interface
- Low-level modules (in-memory broadcaster) implement this interface
"""

from typing import Any, AsyncIterator, Dict, Protocol


class IRealtimePublisher(Protocol):
    async def publish(self, *, channel: str, event: str, data: Dict[str, Any]) -> int:
        """
        Publish one event to every subscriber of ``channel``

        Returns:
            Number of subscribers the event was handed to
        """
        ...

    def subscribe(self, *, channel: str) -> AsyncIterator[Dict[str, Any]]:
        """Yield ``{"event": ..., "data": ...}`` items published to ``channel`` until closed"""
        ...
