"""
Tests for domain collection repositories

Tests JsonFileRepository, InMemoryRepository, read_source() and repositories_for().
"""

import json
from unittest.mock import patch

import pytest

from traceboard.errors import SourceError
from traceboard.storage.repositories import (
    InMemoryRepository,
    JsonFileRepository,
    SourceResult,
    read_source,
    repositories_for,
)


@pytest.fixture
def releases_repository(tmp_path):
    return JsonFileRepository(tmp_path, "releases")


class TestJsonFileRepository:
    """Tests for JsonFileRepository"""

    def test_path_uses_storage_key(self, tmp_path):
        assert JsonFileRepository(tmp_path, "testCases").path == tmp_path / "testCases.json"

    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, releases_repository):
        assert await releases_repository.read() == []

    @pytest.mark.asyncio
    async def test_write_then_read(self, releases_repository):
        records = [{"id": "r1", "progress": 40}, {"id": "r2", "progress": 80}]
        await releases_repository.write(records)
        assert await releases_repository.read() == records

    @pytest.mark.asyncio
    async def test_write_replaces_whole_collection(self, releases_repository):
        await releases_repository.write([{"id": "r1"}, {"id": "r2"}])
        await releases_repository.write([{"id": "r3"}])
        assert await releases_repository.read() == [{"id": "r3"}]

    @pytest.mark.asyncio
    async def test_write_leaves_no_temp_files(self, tmp_path, releases_repository):
        await releases_repository.write([{"id": "r1"}])
        assert [p.name for p in tmp_path.iterdir()] == ["releases.json"]

    @pytest.mark.asyncio
    async def test_null_file_is_empty(self, releases_repository):
        releases_repository.path.write_text("null", encoding="utf-8")
        assert await releases_repository.read() == []

    @pytest.mark.asyncio
    async def test_corrupt_file_raises_source_error(self, releases_repository):
        releases_repository.path.write_text("[{broken", encoding="utf-8")
        with pytest.raises(SourceError) as exc_info:
            await releases_repository.read()
        assert exc_info.value.domain == "releases"

    @pytest.mark.asyncio
    async def test_non_array_raises_source_error(self, releases_repository):
        releases_repository.path.write_text(json.dumps({"id": "r1"}), encoding="utf-8")
        with pytest.raises(SourceError, match="expected a JSON array"):
            await releases_repository.read()

    @pytest.mark.asyncio
    async def test_write_failure_is_raised(self, releases_repository):
        with patch("traceboard.storage.repositories.atomic_json_save", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                await releases_repository.write([{"id": "r1"}])


class TestInMemoryRepository:
    """Tests for InMemoryRepository"""

    @pytest.mark.asyncio
    async def test_read_returns_copy(self):
        repository = InMemoryRepository("squads", [{"id": "sq1", "engineers": []}])
        records = await repository.read()
        records[0]["engineers"].append("u1")
        assert (await repository.read())[0]["engineers"] == []

    @pytest.mark.asyncio
    async def test_write_copies_input(self):
        repository = InMemoryRepository("squads")
        records = [{"id": "sq1"}]
        await repository.write(records)
        records.append({"id": "sq2"})
        assert await repository.read() == [{"id": "sq1"}]

    @pytest.mark.asyncio
    async def test_error_raises_source_error(self):
        with pytest.raises(SourceError, match="offline"):
            await InMemoryRepository("squads", error="offline").read()


class TestReadSource:
    """Tests for read_source()"""

    @pytest.mark.asyncio
    async def test_success(self):
        result = await read_source(InMemoryRepository("releases", [{"id": "r1"}]))
        assert result == SourceResult(domain="releases", records=[{"id": "r1"}])
        assert result.ok is True

    @pytest.mark.asyncio
    async def test_source_error_is_captured(self):
        result = await read_source(InMemoryRepository("releases", error="offline"))
        assert result.ok is False
        assert result.records == []
        assert result.error.reason == "offline"

    @pytest.mark.asyncio
    async def test_corrupt_file_is_captured(self, releases_repository):
        releases_repository.path.write_text("oops", encoding="utf-8")
        result = await read_source(releases_repository)
        assert result.domain == "releases"
        assert isinstance(result.error, SourceError)


class TestRepositoriesFor:
    """Tests for repositories_for()"""

    def test_one_repository_per_domain(self, tmp_path):
        repositories = repositories_for(tmp_path)
        assert len(repositories) == 9
        assert repositories["userJourneys"].path == tmp_path / "userJourneys.json"
