"""
Base domain model for metric snapshots

Provides the foundation class for point-in-time metric results:
    - MetricSnapshot: timestamp plus the data source the numbers came from
"""

from dataclasses import dataclass
from datetime import datetime

SOURCE_COLLECTIONS = "collections"
SOURCE_OVERVIEW = "overview"
SOURCE_EMPTY = "empty"


@dataclass(frozen=True, kw_only=True)
class MetricSnapshot:
    """
    Base class for point-in-time metric snapshots.

    Attributes:
        timestamp: When the snapshot was computed
        source: Where the numbers came from ("collections", "overview" or "empty")

    Example:
        >>> from datetime import datetime
        >>> snapshot = MetricSnapshot(timestamp=datetime.now())  # Valid
        >>> snapshot = MetricSnapshot(timestamp="2026-01-01")  # Raises TypeError
    """

    timestamp: datetime
    source: str = SOURCE_COLLECTIONS

    def __post_init__(self) -> None:
        """
        Validate timestamp is a datetime object.

        Raises:
            TypeError: If timestamp is not a datetime instance
        """
        if not isinstance(self.timestamp, datetime):
            raise TypeError(f"timestamp must be datetime, got {type(self.timestamp)}")
