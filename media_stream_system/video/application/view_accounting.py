"""
View Accounting Application Service.

Dispatches view-count increments as background tasks. A request never waits
for an increment and never sees its failure.
"""

import asyncio
import logging
from typing import Optional, Set

from ...core.logging_config import get_error_tracker
from ..domain.exceptions import AccountingFailure
from ..domain.interfaces import ViewCounter


class ViewAccountant:
    """Fire-and-forget view accounting"""

    def __init__(self, view_counter: ViewCounter, increment_timeout_seconds: float = 5.0, enabled: bool = True):
        self.view_counter = view_counter
        self.increment_timeout_seconds = increment_timeout_seconds
        self.enabled = enabled
        self.logger = logging.getLogger(__name__)
        self.error_tracker = get_error_tracker("view_accounting")

        # Strong references keep running tasks from being garbage collected
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def record_view(self, media_id: str) -> None:
        """Schedule one increment for media_id and return immediately"""
        if not self.enabled:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.error_tracker.log_error(AccountingFailure("no running event loop"), "record_view", {"media_id": media_id})
            return

        task = loop.create_task(self._increment(media_id), name=f"record-view-{media_id}")
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _increment(self, media_id: str) -> Optional[int]:
        try:
            views = await asyncio.wait_for(self.view_counter.increment(media_id), timeout=self.increment_timeout_seconds)
        except asyncio.CancelledError:
            self.error_tracker.log_warning(f"View increment for {media_id} cancelled before completion", "record_view")
            raise
        except asyncio.TimeoutError:
            self.error_tracker.log_error(AccountingFailure(f"increment timed out after {self.increment_timeout_seconds}s"), "record_view", {"media_id": media_id})
            return None
        except Exception as e:
            self.error_tracker.log_error(AccountingFailure(str(e)), "record_view", {"media_id": media_id})
            return None

        if views is None:
            self.logger.warning(f"View increment for {media_id} matched no record")
        else:
            self.logger.debug(f"Recorded view for {media_id} (views={views})")
        return views

    async def drain(self, timeout: Optional[float] = None) -> int:
        """
        Wait for in-flight increments.

        Increments still running after ``timeout`` are cancelled and logged
        as dropped.

        Returns:
            Number of dropped increments.
        """
        pending = list(self._pending)
        if not pending:
            return 0

        self.logger.info(f"Waiting for {len(pending)} in-flight view increments")
        _, not_done = await asyncio.wait(pending, timeout=timeout)

        for task in not_done:
            task.cancel()
            self.error_tracker.log_warning(f"Dropped in-flight increment {task.get_name()}", "shutdown")

        if not_done:
            await asyncio.gather(*not_done, return_exceptions=True)

        return len(not_done)
