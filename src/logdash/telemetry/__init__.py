"""Telemetry system - batched, retried event delivery."""

from .events import LogLevel, LogPayload, MetricOperation, MetricPayload, TelemetryPayload
from .queue import EventQueue

__all__ = [
    "LogLevel",
    "LogPayload",
    "MetricOperation",
    "MetricPayload",
    "TelemetryPayload",
    "EventQueue",
]
