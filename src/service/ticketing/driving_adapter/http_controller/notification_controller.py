from collections.abc import AsyncIterator

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
import orjson
from sse_starlette.sse import EventSourceResponse

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_realtime_publisher import IRealtimePublisher
from src.service.ticketing.domain.value_object.session_context import SessionContext
from src.service.ticketing.driving_adapter.http_controller.auth.session_auth import (
    get_session_context,
)


router = APIRouter()


@router.get('/stream', status_code=status.HTTP_200_OK)
@inject
async def stream_notifications(
    session: SessionContext = Depends(get_session_context),
    realtime_publisher: IRealtimePublisher = Depends(Provide[Container.realtime_publisher]),
    settings: Settings = Depends(Provide[Container.config_service]),
) -> EventSourceResponse:
    """
    SSE stream of the session user's notifications

    Every item published on the notification channel reaches every subscriber;
    only items whose ``userId`` matches the session user are forwarded.
    """
    user_id = session.user_id
    channel = settings.REALTIME_NOTIFICATION_CHANNEL
    Logger.base.info(f'📡 [SSE] User {user_id} subscribing to {channel}')

    async def event_generator() -> AsyncIterator[dict[str, str]]:
        try:
            async for item in realtime_publisher.subscribe(channel=channel):
                data = item.get('data') or {}
                if str(data.get('userId')) != user_id:
                    continue

                yield {'event': item['event'], 'data': orjson.dumps(data).decode()}
                Logger.base.debug(
                    f'📡 [SSE] Sent {item["event"]} to user={user_id} (id={data.get("id")})'
                )
        except anyio.get_cancelled_exc_class():
            Logger.base.info(f'🔌 [SSE] Client disconnected: user={user_id}')
            raise

    return EventSourceResponse(event_generator())
