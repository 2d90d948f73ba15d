"""Command line entry point: run ingestion cycles over the configured feeds."""

from __future__ import annotations

import argparse
import logging
import signal
import threading
from dataclasses import replace
from typing import List, Optional

from .config import load_settings, log_level_name
from .core import FeedIngester
from .exceptions import ConfigError
from .storage import load_store

logger = logging.getLogger(__name__)


def _install_signal_handlers(stop: threading.Event) -> None:
    def _handle(signum, _frame) -> None:
        logger.info("Shutdown signal %s received", signal.Signals(signum).name)
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            signal.signal(sig, _handle)
        except (ValueError, OSError):
            logger.warning("Unable to install signal handler for %s", sig.name)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rss-archive", description=__doc__)
    parser.add_argument("--config", default=None, help="Path to the JSON config file (default: config.json).")
    parser.add_argument("--output", default=None, help="Override the store file path.")
    parser.add_argument("--once", action="store_true", help="Run a single cycle and exit.")
    parser.add_argument("--log-level", default=None, help="Override the log level (e.g. DEBUG).")
    return parser


def main(argv: Optional[List[str]] = None, stop: Optional[threading.Event] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.config)
        if args.log_level:
            settings = replace(settings, log_level=log_level_name(args.log_level, "--log-level"))
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
        logger.error("Invalid configuration: %s", e)
        return 2
    if args.output:
        settings = replace(settings, output=args.output)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if not settings.urls:
        logger.warning("No feed URLs configured; nothing to do")

    store = load_store(settings.output)
    logger.info("Loaded %d feeds from %s", len(store), settings.output)

    if stop is None:
        stop = threading.Event()
        if not args.once:
            _install_signal_handlers(stop)

    with FeedIngester(
        store,
        max_workers=settings.max_workers,
        timeout_seconds=settings.timeout_seconds,
        user_agent=settings.user_agent,
        store_path=settings.output,
    ) as ingester:
        while True:
            ingester.run_cycle(settings.urls)
            if args.once or settings.interval_seconds <= 0:
                break
            logger.info("Next cycle in %.1f hours", settings.interval_hours)
            if stop.wait(settings.interval_seconds):
                break
    return 0
