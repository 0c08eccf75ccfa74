"""Tests for the Logdash facade."""

import logging

import pytest

from logdash.config import Config, QueueConfig
from logdash.logger import Logdash, format_data
from logdash.telemetry.events import LogLevel
from logdash.transport.http import HttpClient

from tests.mocks.collector import FakeCollector


@pytest.fixture
def remote_config() -> Config:
    config = Config()
    config.logs = QueueConfig(batch_size=100, flush_interval_seconds=10.0, base_retry_delay_seconds=0.01)
    config.metrics = QueueConfig(batch_size=100, flush_interval_seconds=10.0, base_retry_delay_seconds=0.01)
    return config


class TestLocalMode:
    def test_creates_without_api_key(self, caplog):
        with caplog.at_level(logging.WARNING):
            logdash = Logdash()

        assert not logdash.remote
        assert "No API key provided, using local mode." in caplog.text

    @pytest.mark.parametrize("method,label", [
        ("error", "ERROR"),
        ("warn", "WARNING"),
        ("info", "INFO"),
        ("http", "HTTP"),
        ("verbose", "VERBOSE"),
        ("debug", "DEBUG"),
        ("silly", "SILLY"),
    ])
    def test_prints_each_level(self, capsys, method, label):
        logdash = Logdash()

        getattr(logdash, method)("test message")

        out = capsys.readouterr().out
        assert label in out
        assert "test message" in out

    def test_includes_namespace_in_output(self, capsys):
        Logdash().with_namespace("auth").info("User logged in")

        out = capsys.readouterr().out
        assert "[auth]" in out
        assert "User logged in" in out

    def test_metrics_are_ignored(self):
        logdash = Logdash()
        logdash.set_metric("users", 1)
        logdash.mutate_metric("users", 1)
        assert logdash.stats == {}

    @pytest.mark.asyncio
    async def test_flush_and_destroy_are_noops(self):
        logdash = Logdash()
        await logdash.flush()
        logdash.destroy()


class TestFormatData:
    def test_joins_arguments(self):
        assert format_data(("a", 1, None, True)) == "a 1 None True"

    def test_formats_objects_as_json(self):
        assert format_data(("user", {"id": 1})) == 'user {"id": 1}'
        assert format_data(([1, 2],)) == "[1, 2]"

    def test_falls_back_to_str(self):
        value = {"when": object()}
        assert format_data((value,)) == str(value)


class TestRemoteMode:
    @pytest.mark.asyncio
    async def test_ships_logs_and_metrics(self, collector, http_client, remote_config):
        logdash = Logdash("test-key", config=remote_config, http_client=http_client)
        assert logdash.remote

        logdash.info("first")
        logdash.error("second", {"code": 7})
        logdash.set_metric("active_users", 42)
        logdash.mutate_metric("requests", 1)

        await logdash.flush()
        logdash.destroy()

        posts = collector.bodies("POST")
        assert len(posts) == 1
        logs = posts[0]["logs"]
        assert [log["message"] for log in logs] == ["first", 'second {"code": 7}']
        assert [log["level"] for log in logs] == ["info", "error"]
        assert [log["sequenceNumber"] for log in logs] == [0, 1]
        assert all(log["createdAt"].endswith("Z") for log in logs)

        puts = sorted(collector.bodies("PUT"), key=lambda b: b["name"])
        assert puts == [
            {"name": "active_users", "value": 42, "operation": "set"},
            {"name": "requests", "value": 1, "operation": "change"},
        ]

    @pytest.mark.asyncio
    async def test_namespaces_share_sequence(self, collector, http_client, remote_config):
        logdash = Logdash("test-key", config=remote_config, http_client=http_client)
        auth = logdash.with_namespace("auth")
        payments = logdash.with_namespace("payments")

        logdash.info("root")
        auth.info("login")
        payments.warn("slow gateway")
        auth.mutate_metric("login_count", 1)

        await logdash.flush()
        logdash.destroy()

        logs = collector.bodies("POST")[0]["logs"]
        assert [(log.get("namespace"), log["sequenceNumber"]) for log in logs] == [
            (None, 0),
            ("auth", 1),
            ("payments", 2),
        ]
        assert collector.bodies("PUT") == [
            {"name": "login_count", "value": 1, "operation": "change", "namespace": "auth"},
        ]

    @pytest.mark.asyncio
    async def test_log_accepts_level_value(self, collector, http_client, remote_config):
        logdash = Logdash("test-key", config=remote_config, http_client=http_client)

        logdash.log("warning", "careful")
        logdash.log(LogLevel.SILLY, "whee")
        await logdash.flush()
        logdash.destroy()

        logs = collector.bodies("POST")[0]["logs"]
        assert [log["level"] for log in logs] == ["warning", "silly"]

    @pytest.mark.asyncio
    async def test_verbose_echoes_metrics(self, caplog, http_client, remote_config):
        remote_config.verbose = True
        logdash = Logdash("test-key", config=remote_config, http_client=http_client)

        with caplog.at_level(logging.INFO, logger="logdash.logger"):
            logdash.set_metric("users", 3)
            logdash.mutate_metric("users", -1)

        assert "Setting metric users to 3" in caplog.text
        assert "Mutating metric users by -1" in caplog.text
        logdash.destroy()

    @pytest.mark.asyncio
    async def test_flush_survives_collector_outage(self, transport_config, remote_config):
        collector = FakeCollector(status_for=lambda r: 503)
        client = HttpClient(config=transport_config, http_transport=collector.transport)
        logdash = Logdash("test-key", config=remote_config, http_client=client)

        logdash.info("lost")
        await logdash.flush()
        logdash.destroy()

        # Three attempts, then dropped
        assert len(collector.requests) == 3
        assert logdash.stats["logs"]["items_dropped"] == 1

    @pytest.mark.asyncio
    async def test_api_key_from_config(self, remote_config):
        remote_config.transport.api_key = "from-config"
        logdash = Logdash(config=remote_config)
        assert logdash.remote
        logdash.destroy()

    @pytest.mark.asyncio
    async def test_api_key_argument_does_not_mutate_config(self, remote_config):
        logdash = Logdash("arg-key", config=remote_config)
        assert remote_config.transport.api_key is None
        logdash.destroy()
