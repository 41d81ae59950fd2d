"""
Aggregation - Cross-domain DashboardSnapshot construction
"""

from .aggregator import SnapshotAggregator, build_snapshot, parse_records, resolve_collection

__all__ = ["SnapshotAggregator", "build_snapshot", "parse_records", "resolve_collection"]
