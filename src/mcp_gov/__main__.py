from __future__ import annotations

import logging
import sys
import typing as t

import anyio
import click

from .server import run_stdio
from .utils.config import ServerConfig


@click.command()
@click.option(
    "--log-level",
    default="INFO",
    help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.option("--cache-max-entries", type=int, default=None, help="Maximum number of cached lookups")
@click.option(
    "--cache-ttl-seconds",
    type=float,
    default=None,
    help="Seconds before a cached lookup expires (0 disables expiry)",
)
def main(log_level: str, cache_max_entries: t.Optional[int], cache_ttl_seconds: t.Optional[float]) -> int:
    # stdout carries the MCP stdio stream
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = ServerConfig.from_env()
    if cache_max_entries is not None:
        config.cache.max_entries = cache_max_entries
    if cache_ttl_seconds is not None:
        config.cache.ttl_seconds = cache_ttl_seconds or None

    anyio.run(run_stdio, config)
    return 0


if __name__ == "__main__":
    main()
