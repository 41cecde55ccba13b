import anyio
from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.enqueue_event_reminders_use_case import (
    EnqueueEventRemindersUseCase,
)


class ReminderWorker:
    """Periodically enqueue day-before and hour-before reminder emails"""

    def __init__(
        self,
        *,
        use_case: EnqueueEventRemindersUseCase,
        scan_interval: float = 300.0,
    ) -> None:
        self.use_case = use_case
        self._scan_interval = scan_interval

    async def start(self, *, task_group: TaskGroup) -> None:
        task_group.start_soon(self._scan_loop)  # pyrefly: ignore[bad-argument-type]
        Logger.base.info(f'⏰ [Reminder Worker] Started (interval={self._scan_interval}s)')

    async def _scan_loop(self) -> None:
        while True:
            try:
                await self.use_case.enqueue_all()
            except Exception as e:
                Logger.base.error(f'❌ [Reminder Worker] Scan failed: {e}')

            await anyio.sleep(self._scan_interval)
