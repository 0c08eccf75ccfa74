"""Producer-facing logdash facade."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, replace
from typing import Any

from colorama import Fore, Style

from .config import Config
from .telemetry.events import LogLevel, LogPayload, MetricOperation, MetricPayload, format_timestamp
from .telemetry.queue import EventQueue
from .transport.http import HttpClient, create_log_transport, create_metric_transport


logger = logging.getLogger(__name__)


LEVEL_COLORS: dict[LogLevel, str] = {
    LogLevel.ERROR: Fore.RED,
    LogLevel.WARN: Fore.YELLOW,
    LogLevel.INFO: Fore.BLUE,
    LogLevel.HTTP: Fore.CYAN,
    LogLevel.VERBOSE: Fore.GREEN,
    LogLevel.DEBUG: Fore.LIGHTGREEN_EX,
    LogLevel.SILLY: Fore.LIGHTBLACK_EX,
}


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}"


def format_data(data: tuple[Any, ...]) -> str:
    """Join log arguments with spaces; containers are rendered as JSON."""
    parts = []
    for item in data:
        if isinstance(item, (dict, list)):
            try:
                parts.append(json.dumps(item))
            except (TypeError, ValueError):
                parts.append(str(item))
        else:
            parts.append(str(item))
    return " ".join(parts)


@dataclass
class _LogdashCore:
    """State shared by a root logger and all of its namespaced views."""
    log_queue: EventQueue[LogPayload] | None
    metric_queue: EventQueue[MetricPayload] | None
    sequence_number: int = 0
    verbose: bool = False

    def next_sequence_number(self) -> int:
        number = self.sequence_number
        self.sequence_number += 1
        return number


class Logdash:
    """
    Logs to the console and ships logs and metrics to logdash.

    Without an API key the instance runs in local mode: logs are only
    printed and metrics are ignored. With a key, payloads are batched and
    delivered in the background, so remote mode must be created inside a
    running event loop.

    Usage:
        logdash = Logdash("my-api-key")
        logdash.info("service started", {"port": 8080})
        logdash.set_metric("active_users", 42)

        auth = logdash.with_namespace("auth")
        auth.mutate_metric("login_count", 1)

        await logdash.flush()
        logdash.destroy()
    """

    def __init__(
        self,
        api_key: str | None = None,
        config: Config | None = None,
        http_client: HttpClient | None = None,
        *,
        _core: _LogdashCore | None = None,
        _namespace: str | None = None,
    ):
        self.namespace = _namespace

        if _core is not None:
            self._core = _core
            return

        config = config or Config()
        transport_config = config.transport
        if api_key:
            transport_config = replace(transport_config, api_key=api_key)

        if transport_config.api_key:
            client = http_client or HttpClient(config=transport_config)
            self._core = _LogdashCore(
                log_queue=EventQueue(create_log_transport(client), config.logs),
                metric_queue=EventQueue(create_metric_transport(client), config.metrics),
                verbose=config.verbose,
            )
        else:
            logger.warning("No API key provided, using local mode.")
            self._core = _LogdashCore(
                log_queue=None,
                metric_queue=None,
                verbose=config.verbose,
            )

    @property
    def remote(self) -> bool:
        return self._core.log_queue is not None

    # Logging

    def error(self, *data: Any) -> None:
        self._log(LogLevel.ERROR, data)

    def warn(self, *data: Any) -> None:
        self._log(LogLevel.WARN, data)

    def info(self, *data: Any) -> None:
        self._log(LogLevel.INFO, data)

    def http(self, *data: Any) -> None:
        self._log(LogLevel.HTTP, data)

    def verbose(self, *data: Any) -> None:
        self._log(LogLevel.VERBOSE, data)

    def debug(self, *data: Any) -> None:
        self._log(LogLevel.DEBUG, data)

    def silly(self, *data: Any) -> None:
        self._log(LogLevel.SILLY, data)

    def log(self, level: LogLevel | str, *data: Any) -> None:
        """Log at a level given by value, e.g. ``"warning"``."""
        self._log(LogLevel(level), data)

    # Metrics

    def set_metric(self, name: str, value: float) -> None:
        self._metric(name, value, MetricOperation.SET)

    def mutate_metric(self, name: str, delta: float) -> None:
        self._metric(name, delta, MetricOperation.CHANGE)

    # Namespaces

    def with_namespace(self, name: str) -> Logdash:
        """A view sharing this instance's queues and sequence numbers."""
        return Logdash(_core=self._core, _namespace=name)

    # Lifecycle

    async def flush(self) -> None:
        """Send everything buffered and wait for delivery to settle."""
        if self._core.log_queue is None or self._core.metric_queue is None:
            return

        await asyncio.gather(
            self._core.log_queue.flush(),
            self._core.metric_queue.flush(),
        )

    def destroy(self) -> None:
        if self._core.log_queue is not None:
            self._core.log_queue.destroy()
        if self._core.metric_queue is not None:
            self._core.metric_queue.destroy()

    @property
    def stats(self) -> dict:
        if self._core.log_queue is None or self._core.metric_queue is None:
            return {}
        return {
            "logs": self._core.log_queue.stats,
            "metrics": self._core.metric_queue.stats,
        }

    def _log(self, level: LogLevel, data: tuple[Any, ...]) -> None:
        message = format_data(data)
        payload = LogPayload.create(
            message=message,
            level=level,
            sequence_number=self._core.next_sequence_number(),
            namespace=self.namespace,
        )

        print(self._format_line(payload))

        if self._core.log_queue is not None:
            self._core.log_queue.add(payload)

    def _metric(self, name: str, value: float, operation: MetricOperation) -> None:
        if self._core.metric_queue is None:
            return

        if self._core.verbose:
            verb = "Setting" if operation == MetricOperation.SET else "Mutating"
            prep = "to" if operation == MetricOperation.SET else "by"
            logger.info(f"{verb} metric {name} {prep} {value}")

        self._core.metric_queue.add(MetricPayload(
            name=name,
            value=value,
            operation=operation,
            namespace=self.namespace,
        ))

    def _format_line(self, payload: LogPayload) -> str:
        date_prefix = colorize(f"[{format_timestamp(payload.created_at)}]", Style.DIM)
        level_prefix = colorize(f"{payload.level.value.upper()} ", LEVEL_COLORS[payload.level])
        namespace_prefix = (
            colorize(f"[{payload.namespace}] ", Fore.WHITE) if payload.namespace else ""
        )
        return f"{date_prefix} {level_prefix}{namespace_prefix}{payload.message}"
