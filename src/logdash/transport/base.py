"""Base transport interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar

from ..telemetry.events import TelemetryPayload


T = TypeVar("T", bound=TelemetryPayload)


class TransportError(Exception):
    """A delivery attempt did not reach the collector."""
    pass


class TransportStatusError(TransportError):
    """Collector answered with a non-2xx status."""
    def __init__(self, status_code: int, reason: str = ""):
        super().__init__(f"HTTP {status_code}: {reason}".rstrip(": "))
        self.status_code = status_code
        self.reason = reason


class TransportTimeoutError(TransportError):
    """Request did not complete within the configured timeout."""
    def __init__(self, url: str, timeout_seconds: float):
        super().__init__(f"Request to {url} timed out after {timeout_seconds}s")
        self.url = url
        self.timeout_seconds = timeout_seconds


class Transport(ABC, Generic[T]):
    """
    Abstract base class for transports.

    A transport performs one network exchange for a non-empty, ordered
    batch. It returns on success and raises on failure; the caller owns
    retrying.
    """

    @abstractmethod
    async def send(self, items: Sequence[T]) -> None:
        """
        Deliver a batch of items.

        Should be idempotent if possible (batches are resent on failure).
        """
        ...

    async def __call__(self, items: Sequence[T]) -> None:
        await self.send(items)
