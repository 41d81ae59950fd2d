"""
Storage - Domain collection repositories and the overview data source
"""

from .overview_source import OverviewSource
from .repositories import (
    CollectionRepository,
    InMemoryRepository,
    JsonFileRepository,
    SourceResult,
    read_source,
    repositories_for,
)

__all__ = [
    "CollectionRepository",
    "InMemoryRepository",
    "JsonFileRepository",
    "OverviewSource",
    "SourceResult",
    "read_source",
    "repositories_for",
]
