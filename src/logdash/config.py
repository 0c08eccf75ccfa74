"""Configuration for the logdash client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


DEFAULT_HOST = "https://api.logdash.io"


@dataclass
class QueueConfig:
    """Batching and retry tunables for one event queue."""
    batch_size: int = 25
    flush_interval_seconds: float = 1.0

    # Total attempts per batch, including the first
    max_retries: int = 3
    base_retry_delay_seconds: float = 1.0


@dataclass
class TransportConfig:
    """
    Collector connection settings.

    Can be set via:
    - Constructor arguments
    - Environment variables (LOGDASH_*)
    - Config file
    """
    host: str = field(
        default_factory=lambda: os.environ.get("LOGDASH_HOST", DEFAULT_HOST)
    )
    api_key: str | None = field(
        default_factory=lambda: os.environ.get("LOGDASH_API_KEY")
    )

    # Per-request timeout (seconds)
    timeout_seconds: float = field(
        default_factory=lambda: float(os.environ.get("LOGDASH_TIMEOUT", "10"))
    )


@dataclass
class Config:
    """Main configuration container."""
    transport: TransportConfig = field(default_factory=TransportConfig)
    logs: QueueConfig = field(default_factory=QueueConfig)
    metrics: QueueConfig = field(default_factory=QueueConfig)

    # Echo metric calls through the internal logger
    verbose: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Create config from dictionary."""
        return cls(
            transport=TransportConfig(**data.get("transport", {})),
            logs=QueueConfig(**data.get("logs", {})),
            metrics=QueueConfig(**data.get("metrics", {})),
            verbose=bool(data.get("verbose", False)),
        )

    @classmethod
    def from_yaml(cls, path: str) -> Config:
        """Load config from YAML file."""
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str) -> Config:
        """Load config from JSON file."""
        import json
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)
