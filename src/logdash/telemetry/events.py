"""Telemetry payload types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class LogLevel(str, Enum):
    """Severity of a log entry, as understood by the collector."""
    ERROR = "error"
    WARN = "warning"
    INFO = "info"
    HTTP = "http"
    VERBOSE = "verbose"
    DEBUG = "debug"
    SILLY = "silly"


class MetricOperation(str, Enum):
    """How the collector applies a metric value."""
    SET = "set"
    CHANGE = "change"


class TelemetryPayload(ABC):
    """
    Anything a transport can put on the wire.

    The queue never looks inside items; transports only need ``to_dict``.
    """

    __slots__ = ()

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Convert to the collector's JSON shape."""
        ...


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


@dataclass(frozen=True, slots=True)
class LogPayload(TelemetryPayload):
    """A single log line bound for ``/logs/batch``."""
    message: str
    level: LogLevel
    created_at: datetime
    sequence_number: int
    namespace: str | None = None

    @classmethod
    def create(
        cls,
        message: str,
        level: LogLevel,
        sequence_number: int,
        namespace: str | None = None,
    ) -> LogPayload:
        """Factory stamping the current UTC time."""
        return cls(
            message=message,
            level=level,
            created_at=datetime.now(timezone.utc),
            sequence_number=sequence_number,
            namespace=namespace,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "message": self.message,
            "level": LogLevel(self.level).value,
            "createdAt": format_timestamp(self.created_at),
            "sequenceNumber": self.sequence_number,
        }
        if self.namespace is not None:
            data["namespace"] = self.namespace
        return data


@dataclass(frozen=True, slots=True)
class MetricPayload(TelemetryPayload):
    """A single metric update bound for ``/metrics``."""
    name: str
    value: float
    operation: MetricOperation
    namespace: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "value": self.value,
            "operation": MetricOperation(self.operation).value,
        }
        if self.namespace is not None:
            data["namespace"] = self.namespace
        return data
