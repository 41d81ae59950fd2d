"""
Domain Collection Store - One repository per domain collection

Each domain collection is read and written as a whole ("last write wins"):

    - CollectionRepository: abstract read() / write(records)
    - JsonFileRepository: one <data_dir>/<key>.json file, atomic writes
    - InMemoryRepository: list-backed store for tests and embedding
    - read_source(): wraps a read as a SourceResult so one unreadable
      domain never blocks the others

Usage:
    from traceboard.storage import repositories_for, read_source

    repositories = repositories_for(Path(".tmp/traceboard"))
    result = await read_source(repositories["testCases"])
    if result.ok:
        print(len(result.records))
"""

import asyncio
import copy
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from traceboard.core.logging_config import get_logger
from traceboard.domain.constants import domain_keys
from traceboard.errors import SourceError
from traceboard.utils.error_handling import log_and_raise
from traceboard.utils_atomic_json import atomic_json_save

logger = get_logger(__name__)


class CollectionRepository(ABC):
    """
    Storage for one domain collection.

    Attributes:
        key: Domain key (see domain.constants.DomainKeys)
    """

    def __init__(self, key: str):
        self.key = key

    @abstractmethod
    async def read(self) -> list[dict[str, Any]]:
        """
        Return the full collection, or [] when it was never written.

        Raises:
            SourceError: If the collection exists but cannot be read or parsed
        """
        pass

    @abstractmethod
    async def write(self, records: list[dict[str, Any]]) -> None:
        """Replace the whole collection."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r})"


class JsonFileRepository(CollectionRepository):
    """
    Collection stored as a JSON array in ``<data_dir>/<key>.json``.

    File I/O runs in a worker thread (asyncio.to_thread) so concurrent reads
    of several collections overlap.
    """

    def __init__(self, data_dir: Path, key: str):
        super().__init__(key)
        self.path = Path(data_dir) / f"{key}.json"

    def _read_sync(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SourceError(self.key, f"cannot read {self.path}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise SourceError(self.key, f"expected a JSON array in {self.path}, got {type(data).__name__}")
        return data

    async def read(self) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._read_sync)

    async def write(self, records: list[dict[str, Any]]) -> None:
        """
        Atomically replace the collection file.

        Raises:
            OSError, TypeError, ValueError: The write failed (logged, then re-raised)
        """
        try:
            await asyncio.to_thread(atomic_json_save, list(records), self.path)
        except (OSError, TypeError, ValueError) as e:
            log_and_raise(logger, e, {"domain": self.key, "path": str(self.path)}, "Collection write")
        logger.debug(f"Wrote {len(records)} records to {self.path}")


class InMemoryRepository(CollectionRepository):
    """
    Collection held in memory.

    Records are deep-copied on the way in and out, so callers never share
    state with the store.

    Args:
        key: Domain key
        records: Initial collection
        error: When set, read() raises SourceError with this reason
    """

    def __init__(self, key: str, records: list[Any] | None = None, error: str | None = None):
        super().__init__(key)
        self._records: list[Any] = copy.deepcopy(records or [])
        self.error = error

    async def read(self) -> list[dict[str, Any]]:
        if self.error:
            raise SourceError(self.key, self.error)
        return copy.deepcopy(self._records)

    async def write(self, records: list[dict[str, Any]]) -> None:
        self._records = copy.deepcopy(list(records))


@dataclass(frozen=True)
class SourceResult:
    """
    Outcome of reading one domain collection: records or a SourceError.

    Attributes:
        domain: Domain key
        records: The collection (empty on failure)
        error: The failure, or None
    """

    domain: str
    records: list[Any] = field(default_factory=list)
    error: SourceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, domain: str, records: list[Any]) -> "SourceResult":
        return cls(domain=domain, records=records)

    @classmethod
    def failure(cls, error: SourceError) -> "SourceResult":
        return cls(domain=error.domain, error=error)


async def read_source(repository: CollectionRepository) -> SourceResult:
    """
    Read a collection without raising.

    Any failure (including unexpected ones from custom repositories) is
    returned as a SourceError inside the result.
    """
    try:
        records = await repository.read()
    except SourceError as e:
        return SourceResult.failure(e)
    except Exception as e:
        return SourceResult.failure(SourceError(repository.key, f"{e.__class__.__name__}: {e}"))

    if not isinstance(records, list):
        return SourceResult.failure(
            SourceError(repository.key, f"expected a list of records, got {type(records).__name__}")
        )
    return SourceResult.success(repository.key, records)


def repositories_for(data_dir: Path) -> dict[str, CollectionRepository]:
    """One JsonFileRepository per domain collection under data_dir."""
    return {key: JsonFileRepository(data_dir, key) for key in domain_keys.all}
