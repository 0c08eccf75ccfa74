"""Transports - network delivery of telemetry batches."""

from .base import Transport, TransportError, TransportStatusError, TransportTimeoutError
from .http import (
    BatchTransport,
    HttpClient,
    PerItemTransport,
    create_log_transport,
    create_metric_transport,
)

__all__ = [
    "Transport",
    "TransportError",
    "TransportStatusError",
    "TransportTimeoutError",
    "BatchTransport",
    "HttpClient",
    "PerItemTransport",
    "create_log_transport",
    "create_metric_transport",
]
