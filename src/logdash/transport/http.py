"""HTTP transports for the logdash collector API."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx

from ..config import TransportConfig
from ..telemetry.events import LogPayload, MetricPayload
from .base import T, Transport, TransportError, TransportStatusError, TransportTimeoutError


logger = logging.getLogger(__name__)


@dataclass
class HttpClient:
    """
    Issues single JSON requests against the collector.

    Every request carries the project API key and is bounded by
    ``config.timeout_seconds``. Non-2xx responses, network errors and
    timeouts are all raised as ``TransportError`` subclasses.

    Config:
        config: host, api_key and timeout_seconds
        http_transport: optional httpx transport (e.g. ``httpx.MockTransport``)
    """
    config: TransportConfig = field(default_factory=TransportConfig)
    http_transport: httpx.AsyncBaseTransport | None = None

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "project-api-key": self.config.api_key or "",
        }

    def url_for(self, path: str) -> str:
        return f"{self.config.host.rstrip('/')}{path}"

    async def request(self, method: str, path: str, body: Any) -> None:
        """Send one request; return on 2xx, raise otherwise."""
        url = self.url_for(path)
        timeout = self.config.timeout_seconds

        # NaN and infinity have no JSON representation
        try:
            content = json.dumps(body, allow_nan=False)
        except ValueError as e:
            raise TransportError(f"{method} {url} body is not valid JSON: {e}") from e

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self.http_transport) as client:
                response = await asyncio.wait_for(
                    client.request(
                        method,
                        url,
                        headers=self._get_headers(),
                        content=content,
                    ),
                    timeout=timeout,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise TransportTimeoutError(url, timeout) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not response.is_success:
            logger.debug(f"{method} {url} -> {response.status_code}")
            raise TransportStatusError(response.status_code, response.reason_phrase)


@dataclass
class BatchTransport(Transport[T]):
    """
    Sends the whole batch as a single request.

    The body is ``{envelope: [item.to_dict(), ...]}``.
    """
    client: HttpClient
    path: str
    method: str = "POST"
    envelope: str = "items"

    async def send(self, items: Sequence[T]) -> None:
        body = {self.envelope: [item.to_dict() for item in items]}
        await self.client.request(self.method, self.path, body)


@dataclass
class PerItemTransport(Transport[T]):
    """
    Sends one request per item, all concurrently.

    Fails with the first error raised; the remaining requests still run to
    completion on their own.
    """
    client: HttpClient
    path: str
    method: str = "PUT"

    async def send(self, items: Sequence[T]) -> None:
        await asyncio.gather(
            *(self.client.request(self.method, self.path, item.to_dict()) for item in items)
        )


def create_log_transport(client: HttpClient) -> BatchTransport[LogPayload]:
    """``POST /logs/batch`` with body ``{"logs": [...]}``."""
    return BatchTransport(client=client, path="/logs/batch", method="POST", envelope="logs")


def create_metric_transport(client: HttpClient) -> PerItemTransport[MetricPayload]:
    """``PUT /metrics``, one request per metric update."""
    return PerItemTransport(client=client, path="/metrics", method="PUT")
