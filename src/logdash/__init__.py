"""
Logdash - batched log and metric delivery.

Application code logs and records metrics locally; payloads are buffered,
batched and forwarded to the logdash collector in the background, with
retries and exponential backoff on transient failures.

Usage:
    from logdash import Logdash

    logdash = Logdash("my-api-key")
    logdash.info("hello")
    await logdash.flush()
"""

from .config import Config, QueueConfig, TransportConfig
from .logger import Logdash
from .telemetry import EventQueue, LogLevel, LogPayload, MetricOperation, MetricPayload

__version__ = "0.1.0"

__all__ = [
    "Logdash",
    "Config",
    "QueueConfig",
    "TransportConfig",
    "EventQueue",
    "LogLevel",
    "LogPayload",
    "MetricOperation",
    "MetricPayload",
]
