"""Shared test fixtures for logdash tests."""

import pytest

from logdash.config import QueueConfig, TransportConfig
from logdash.transport.http import HttpClient

from tests.mocks.collector import FakeCollector, RecordingSend


# =============================================================================
# Environment
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep LOGDASH_* variables from the developer's shell out of tests."""
    for name in ("LOGDASH_HOST", "LOGDASH_API_KEY", "LOGDASH_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Queue Fixtures
# =============================================================================

@pytest.fixture
def send() -> RecordingSend:
    """Send function that always succeeds."""
    return RecordingSend()


@pytest.fixture
def fast_config() -> QueueConfig:
    """Queue config with short delays so retry tests run quickly."""
    return QueueConfig(
        batch_size=3,
        flush_interval_seconds=10.0,
        max_retries=3,
        base_retry_delay_seconds=0.01,
    )


# =============================================================================
# Transport Fixtures
# =============================================================================

@pytest.fixture
def collector() -> FakeCollector:
    """Collector that accepts everything."""
    return FakeCollector()


@pytest.fixture
def transport_config() -> TransportConfig:
    return TransportConfig(host="https://api.test.com", api_key="test-key", timeout_seconds=1.0)


@pytest.fixture
def http_client(collector, transport_config) -> HttpClient:
    """HttpClient wired to the fake collector."""
    return HttpClient(config=transport_config, http_transport=collector.transport)


# =============================================================================
# Test Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks test as slow")
