#!/usr/bin/env python3
"""Demo script showing logdash usage.

Demonstrates:
1. Local mode - console output only
2. Remote mode - batched delivery of logs and metrics
3. Namespaces
4. Graceful shutdown with flush()

Run with an API key to ship to the collector:
    LOGDASH_API_KEY=... python examples/quickstart.py
"""

import asyncio
import logging
import os

from logdash import Config, Logdash, TransportConfig


def print_section(title: str):
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f" {title}")
    print("=" * 70)


def demo_local_mode():
    print_section("1. LOCAL MODE - console only")

    local = Logdash(config=Config(transport=TransportConfig(api_key=None)))
    local.error("This is an error message")
    local.warn("This is a warning message")
    local.info("This is an info message")
    local.http("This is an http message")
    local.verbose("This is a verbose message")
    local.debug("This is a debug message")
    local.silly("This is a silly message")


async def demo_remote_mode():
    print_section("2. REMOTE MODE - batched delivery")

    logdash = Logdash(os.environ.get("LOGDASH_API_KEY"))
    logdash.error("This is a SYNCED error message")

    print_section("3. NAMESPACES")
    auth = logdash.with_namespace("auth")
    auth.info("User logged in")
    auth.mutate_metric("login_count", 1)

    payments = logdash.with_namespace("payments")
    payments.info("Payment processed")
    payments.warn("Payment gate not responding in 5s")
    payments.error("Payment failed")
    payments.mutate_metric("payment_count", 1)

    logdash.set_metric("active_users", 42)
    logdash.mutate_metric("requests", 1)

    print_section("4. SHUTDOWN")
    await logdash.flush()
    logdash.destroy()
    print(f"All logs and metrics flushed! {logdash.stats}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    demo_local_mode()
    asyncio.run(demo_remote_mode())
