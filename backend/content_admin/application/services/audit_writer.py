"""Audit Writer — bounded in-memory channel drained by one background task."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from content_admin.domain.entities import AuditLogEntry
from content_admin.domain.exceptions import AuditWriteError

logger = logging.getLogger(__name__)

AuditSink = Callable[[AuditLogEntry], Awaitable[object]]


class AuditWriter:
    """Persists audit entries off the request path.

    ``enqueue`` never blocks and never raises, so a slow or failing audit
    store cannot fail a user-facing request. Runs as an asyncio.Task inside
    FastAPI's lifespan; ``stop`` can drain pending entries before exiting.
    """

    def __init__(
        self,
        sink: AuditSink,
        *,
        max_size: int = 1000,
        drain_timeout: float = 5.0,
    ) -> None:
        self._sink = sink
        self._queue: asyncio.Queue[AuditLogEntry] = asyncio.Queue(maxsize=max_size)
        self._drain_timeout = drain_timeout
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background drain loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("AuditWriter started")

    def enqueue(self, entry: AuditLogEntry) -> bool:
        """Queue an entry for persistence. Returns False when it was dropped."""
        try:
            self._queue.put_nowait(entry)
        except asyncio.QueueFull:
            error = AuditWriteError(entry.biz_type, entry.data_id, "audit queue is full")
            logger.error("%s; entry dropped", error)
            return False
        return True

    async def flush(self) -> None:
        """Wait until every queued entry has been processed."""
        await self._queue.join()

    async def stop(self, drain: bool = True) -> None:
        """Stop the loop, optionally waiting for pending entries first."""
        if drain and self.running:
            try:
                await asyncio.wait_for(self._queue.join(), timeout=self._drain_timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    "AuditWriter drain timed out; %d entries not persisted", self.pending
                )
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("AuditWriter stopped")

    async def _loop(self) -> None:
        while True:
            entry = await self._queue.get()
            try:
                await self._sink(entry)
            except AuditWriteError as exc:
                logger.error("%s", exc, exc_info=exc.__cause__ or exc)
            except Exception:
                logger.exception(
                    "Audit write failed for %s#%s", entry.biz_type, entry.data_id
                )
            finally:
                self._queue.task_done()
