#!/usr/bin/env python3
"""
CLI tool for sending logs and metrics to logdash.

Usage:
    python -m logdash.cli --api-key KEY log info "deploy finished"
    python -m logdash.cli --api-key KEY --namespace billing log error "charge failed"
    python -m logdash.cli --api-key KEY metric set active_users 42
    python -m logdash.cli --api-key KEY metric change requests 1
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from colorama import Fore, Style, init as colorama_init

from .config import Config
from .logger import Logdash, colorize
from .telemetry.events import LogLevel


def build_config(args: argparse.Namespace) -> Config:
    """Config file first, then command line overrides."""
    config = Config.from_yaml(args.config) if args.config else Config()
    if args.host:
        config.transport.host = args.host
    if args.api_key:
        config.transport.api_key = args.api_key
    if args.debug:
        config.verbose = True
    return config


def print_stats(stats: dict) -> None:
    """Pretty print per-queue delivery statistics."""
    print(f"\n{colorize('Delivery:', Style.BRIGHT)}")
    for queue_name, queue_stats in stats.items():
        sent = queue_stats["items_sent"]
        dropped = queue_stats["items_dropped"]
        color = Fore.RED if dropped else Fore.GREEN
        print(f"  {queue_name}: {colorize(f'{sent} sent', color)}, {dropped} dropped")


async def run(args: argparse.Namespace) -> int:
    config = build_config(args)
    logdash = Logdash(config=config)
    target = logdash.with_namespace(args.namespace) if args.namespace else logdash

    if args.command == "log":
        target.log(args.level, *args.message)
    elif args.command == "metric":
        if not logdash.remote:
            print(colorize("Metrics require an API key", Fore.RED), file=sys.stderr)
            return 1
        if args.operation == "set":
            target.set_metric(args.name, args.value)
        else:
            target.mutate_metric(args.name, args.value)

    await logdash.flush()
    logdash.destroy()

    if logdash.remote:
        print_stats(logdash.stats)
        if any(s["items_dropped"] for s in logdash.stats.values()):
            return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Send logs and metrics to logdash",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", "-c", help="YAML config file")
    parser.add_argument("--host", help="Collector URL (default: $LOGDASH_HOST)")
    parser.add_argument("--api-key", help="Project API key (default: $LOGDASH_API_KEY)")
    parser.add_argument("--namespace", "-n", help="Namespace to tag payloads with")
    parser.add_argument("--debug", action="store_true", help="Verbose internal logging")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # log
    log_parser = subparsers.add_parser("log", help="Send a log line")
    log_parser.add_argument("level", choices=[level.value for level in LogLevel])
    log_parser.add_argument("message", nargs="+", help="Message parts")

    # metric
    metric_parser = subparsers.add_parser("metric", help="Send a metric update")
    metric_parser.add_argument("operation", choices=["set", "change"])
    metric_parser.add_argument("name", help="Metric name")
    metric_parser.add_argument("value", type=float, help="Value (set) or delta (change)")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    colorama_init()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
