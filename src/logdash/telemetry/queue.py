"""Batching event queue with retry and backoff."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, TypeVar

from ..config import QueueConfig


logger = logging.getLogger(__name__)

T = TypeVar("T")

SendFunction = Callable[[list[T]], Awaitable[None]]


@dataclass
class EventQueue(Generic[T]):
    """
    Buffers items and delivers them in batches through ``send``.

    A batch is cut from the head of the buffer either when the buffer
    reaches ``batch_size`` or when the flush timer fires. Each batch is
    delivered by its own task, retried with exponential backoff, and
    dropped with an error log once ``max_retries`` attempts have failed.

    All state is owned by the event loop thread the queue was created on.
    ``add`` must be called from that thread.
    """
    send: SendFunction
    config: QueueConfig = field(default_factory=QueueConfig)

    # Internal state
    _buffer: list[T] = field(default_factory=list, init=False)
    _in_flight: set[asyncio.Task] = field(default_factory=set, init=False)
    _timer_task: asyncio.Task | None = field(default=None, init=False)
    _destroyed: bool = field(default=False, init=False)
    _last_flush: float = field(default_factory=time.time, init=False)
    _stats: dict = field(default_factory=dict, init=False)

    def __post_init__(self):
        if self.config.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if self.config.max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        self._stats = {
            "batches_sent": 0,
            "items_sent": 0,
            "retries": 0,
            "batches_abandoned": 0,
            "items_dropped": 0,
        }
        loop = asyncio.get_running_loop()
        self._timer_task = loop.create_task(self._timer_loop())

    def add(self, item: T) -> None:
        """Append an item; dispatch one batch if the threshold is reached."""
        if self._destroyed:
            return

        self._buffer.append(item)

        if len(self._buffer) >= self.config.batch_size:
            self._flush_batch()

    async def flush(self) -> None:
        """
        Dispatch everything buffered, then wait for all deliveries.

        Waits on every delivery in flight at the time of the call, including
        ones still inside their retry cycle. Never raises for failed
        deliveries. After ``destroy`` no new batch is cut; only deliveries
        already in flight are awaited.
        """
        while self._buffer and not self._destroyed:
            self._flush_batch()

        pending = list(self._in_flight)
        if pending:
            # wait() leaves the deliveries running if flush itself is cancelled
            await asyncio.wait(pending)

    def destroy(self) -> None:
        """Stop accepting items and cancel the flush timer. Idempotent."""
        if self._destroyed:
            return

        self._destroyed = True
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None

        if self._buffer:
            logger.debug(f"Event queue destroyed, dropping {len(self._buffer)} unsent items")
            self._stats["items_dropped"] += len(self._buffer)
            self._buffer.clear()

    def _flush_batch(self) -> None:
        """Cut one batch from the head of the buffer and start delivering it."""
        if self._destroyed or not self._buffer:
            return

        batch = self._buffer[:self.config.batch_size]
        del self._buffer[:self.config.batch_size]
        self._last_flush = time.time()

        task = asyncio.get_running_loop().create_task(self._send_with_retry(batch))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _send_with_retry(self, batch: list[T]) -> None:
        last_error: Exception | None = None

        for attempt in range(self.config.max_retries):
            try:
                await self.send(batch)
                self._stats["batches_sent"] += 1
                self._stats["items_sent"] += len(batch)
                return
            except Exception as e:
                last_error = e

                if attempt < self.config.max_retries - 1:
                    delay = self.config.base_retry_delay_seconds * (2 ** attempt)
                    logger.debug(f"Batch send failed ({e}), retrying in {delay}s")
                    self._stats["retries"] += 1
                    await asyncio.sleep(delay)

        # Abandoned: items are dropped, never requeued
        self._stats["batches_abandoned"] += 1
        self._stats["items_dropped"] += len(batch)
        logger.error(
            f"Failed to send batch after {self.config.max_retries} attempts: {last_error}"
        )

    async def _timer_loop(self) -> None:
        """
        Background loop that dispatches one batch per interval.

        Bounds how long an item can sit in the buffer during low traffic.
        """
        logger.debug(f"Event queue timer started (interval={self.config.flush_interval_seconds}s)")

        while not self._destroyed:
            try:
                await asyncio.sleep(self.config.flush_interval_seconds)
            except asyncio.CancelledError:
                logger.debug("Event queue timer cancelled")
                break

            if self._destroyed:
                break
            if self._buffer:
                self._flush_batch()

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def buffer_size(self) -> int:
        """Current buffer size."""
        return len(self._buffer)

    @property
    def in_flight(self) -> int:
        """Number of batches being delivered or waiting to retry."""
        return len(self._in_flight)

    @property
    def stats(self) -> dict:
        """Get queue statistics."""
        return {
            **self._stats,
            "buffer_size": self.buffer_size,
            "in_flight": self.in_flight,
            "seconds_since_flush": time.time() - self._last_flush,
        }
