#!/usr/bin/env python3
"""
Dashboard Snapshot Refresh

Builds a DashboardSnapshot from the per-domain collection files (or the
overview endpoint when no data directory is given) and prints it as JSON.
With --watch the snapshot is rebuilt every refresh interval, like the live
dashboard's polling.

Usage:
    traceboard-refresh --data-dir .tmp/traceboard
    traceboard-refresh --overview-url https://dashboard.internal/api/dashboard/overview
    traceboard-refresh --data-dir .tmp/traceboard --watch --json-logs
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from traceboard.aggregation.aggregator import SnapshotAggregator
from traceboard.core.logging_config import get_logger, log_with_context, setup_logging
from traceboard.domain.snapshot import DashboardSnapshot
from traceboard.secure_config import ConfigurationError, DashboardConfig, get_config
from traceboard.storage.overview_source import OverviewSource
from traceboard.storage.repositories import repositories_for

logger = get_logger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Build the program dashboard snapshot and print it as JSON")
    parser.add_argument("--data-dir", help="Directory with one <collection>.json file per domain")
    parser.add_argument("--overview-url", help="Overview endpoint, used when no data directory is given")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines on stderr")
    parser.add_argument("--watch", action="store_true", help="Refresh every TRACEBOARD_REFRESH_SECONDS")
    return parser.parse_args(argv)


def build_aggregator(args: argparse.Namespace, config: DashboardConfig) -> SnapshotAggregator:
    """Wire repositories and the overview source from arguments and configuration."""
    overview_url = args.overview_url or config.overview_url
    overview = OverviewSource(overview_url, timeout=config.http_timeout_seconds) if overview_url else None

    if args.data_dir or not overview:
        return SnapshotAggregator(repositories_for(config.data_dir), overview_source=overview)
    return SnapshotAggregator(overview_source=overview)


def emit(snapshot: DashboardSnapshot) -> None:
    print(json.dumps(snapshot.to_dict(), indent=2))
    sys.stdout.flush()


async def run(aggregator: SnapshotAggregator, watch: bool, interval_seconds: int) -> None:
    while True:
        snapshot = await aggregator.refresh()
        log_with_context(
            logger,
            "info",
            "Snapshot refreshed",
            source=snapshot.source,
            coverage_percentage=snapshot.traceability.coverage_percentage,
            orphaned_test_cases=snapshot.traceability.orphaned_test_cases,
        )
        emit(snapshot)
        if not watch:
            return
        await asyncio.sleep(interval_seconds)


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    args = parse_arguments(argv)

    try:
        config = get_config().get_dashboard_config(data_dir=args.data_dir)
    except ConfigurationError as e:
        setup_logging(json_output=args.json_logs)
        logger.error(f"Invalid configuration: {e}")
        return 2

    setup_logging(level=config.log_level, json_output=args.json_logs)
    aggregator = build_aggregator(args, config)

    try:
        asyncio.run(run(aggregator, args.watch, config.refresh_interval_seconds))
    except KeyboardInterrupt:
        logger.info("Stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
