import anyio
from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.dispatch_outbox_use_case import DispatchOutboxUseCase


class OutboxWorker:
    """Poll the outbox and deliver due messages until the task group is cancelled"""

    def __init__(
        self,
        *,
        use_case: DispatchOutboxUseCase,
        poll_interval: float = 2.0,  # seconds between polls when the batch was not full
        batch_size: int = 50,
    ) -> None:
        self.use_case = use_case
        self._poll_interval = poll_interval
        self._batch_size = batch_size

    async def start(self, *, task_group: TaskGroup) -> None:
        task_group.start_soon(self._poll_loop)  # pyrefly: ignore[bad-argument-type]
        Logger.base.info(f'📮 [Outbox Worker] Started (interval={self._poll_interval}s)')

    async def run_once(self) -> int:
        """Dispatch one batch; returns the number of messages claimed"""
        result = await self.use_case.dispatch_due(batch_size=self._batch_size)
        return result.claimed

    async def _poll_loop(self) -> None:
        while True:
            try:
                claimed = await self.run_once()
            except Exception as e:
                Logger.base.error(f'❌ [Outbox Worker] Dispatch failed: {e}')
                claimed = 0

            # A full batch means more may be due; poll again right away
            if claimed < self._batch_size:
                await anyio.sleep(self._poll_interval)
            else:
                await anyio.sleep(0)
