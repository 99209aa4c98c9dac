"""Tests for UUID reference search and strategy selection."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from conftest import skip_if_root, write_asset

from game_asset_sweeper.cache import ContentCache
from game_asset_sweeper.databases.base import AssetInfo
from game_asset_sweeper.platforms.filesystem import LocalAssetDatabase
from game_asset_sweeper.platforms.offline import OfflineAssetDatabase
from game_asset_sweeper.scanner import ReferenceScanner, ScanStrategy


class RecordingDatabase(LocalAssetDatabase):
    """Filesystem database that records every bulk listing request."""

    def __init__(self, project_path: Path):
        super().__init__(project_path)
        self.patterns: list[str] = []

    async def query_assets(self, pattern: str) -> list[AssetInfo]:
        self.patterns.append(pattern)
        return await super().query_assets(pattern)


class FailingDatabase(LocalAssetDatabase):
    """Filesystem database whose bulk listing always raises."""

    async def query_assets(self, pattern: str) -> list[AssetInfo]:
        raise RuntimeError("editor not responding")


class TestDirectReferences:
    """Test that references are found by literal UUID containment."""

    @pytest.mark.asyncio
    async def test_indexed_search_finds_scene(self, project: Path) -> None:
        """Test that a UUID in a scene is found through the bulk listing."""
        scanner = ReferenceScanner(LocalAssetDatabase(project), ContentCache())

        refs = await scanner.find_references("uuid-used")

        assert refs == [project / "assets" / "scenes" / "main.scene"]
        assert scanner.strategy is ScanStrategy.INDEXED

    @pytest.mark.asyncio
    async def test_unreferenced_uuid_has_no_refs(self, project: Path) -> None:
        scanner = ReferenceScanner(LocalAssetDatabase(project), ContentCache())

        assert await scanner.find_references("uuid-unused") == []

    @pytest.mark.asyncio
    async def test_only_searchable_files_are_read(self, project: Path) -> None:
        """Test that images mentioning a UUID don't count as references."""
        write_asset(project / "assets" / "ui" / "fake.png", "uuid-fake", "uuid-unused")
        scanner = ReferenceScanner(LocalAssetDatabase(project), ContentCache())

        assert await scanner.find_references("uuid-unused") == []

    @pytest.mark.asyncio
    async def test_file_search_matches_indexed_search(self, project: Path) -> None:
        """Test that both strategies return the same references."""
        write_asset(
            project / "assets" / "prefabs" / "button.prefab",
            "uuid-prefab",
            '{"_spriteFrame": {"__uuid__": "uuid-used"}}',
        )
        write_asset(project / "assets" / "anims" / "idle.anim", "uuid-anim", "uuid-used")

        indexed = ReferenceScanner(LocalAssetDatabase(project), ContentCache())
        fallback = ReferenceScanner(OfflineAssetDatabase(project), ContentCache())

        for uuid in ("uuid-used", "uuid-unused", "uuid-orphan"):
            indexed_refs = await indexed.find_references(uuid)
            fallback_refs = await fallback.find_references(uuid)
            assert sorted(indexed_refs) == sorted(fallback_refs)

        assert indexed.strategy is ScanStrategy.INDEXED
        assert fallback.strategy is ScanStrategy.FILE_SEARCH

    @pytest.mark.asyncio
    async def test_search_root_limits_search(self, project: Path) -> None:
        """Test that references outside the search root are ignored."""
        scanner = ReferenceScanner(LocalAssetDatabase(project), ContentCache())

        refs = await scanner.find_references("uuid-used", project / "assets" / "ui")

        assert refs == []

    @pytest.mark.asyncio
    async def test_file_contents_are_cached(self, project: Path) -> None:
        """Test that scanned files stay in the content cache."""
        cache = ContentCache()
        scanner = ReferenceScanner(LocalAssetDatabase(project), cache)

        await scanner.find_references("uuid-used")

        assert project / "assets" / "scenes" / "main.scene" in cache


class TestStrategySelection:
    """Test the switch from the indexed listing to file search."""

    @pytest.mark.asyncio
    async def test_empty_listing_downgrades(self, project: Path) -> None:
        """Test that an empty listing switches to file search for good."""
        scanner = ReferenceScanner(OfflineAssetDatabase(project), ContentCache())

        refs = await scanner.find_references("uuid-used")

        assert refs == [project / "assets" / "scenes" / "main.scene"]
        assert scanner.strategy is ScanStrategy.FILE_SEARCH

    @pytest.mark.asyncio
    async def test_failed_listing_downgrades(
        self, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a raising listing is reported and file search takes over."""
        scanner = ReferenceScanner(FailingDatabase(project), ContentCache())

        refs = await scanner.find_references("uuid-used")

        assert refs == [project / "assets" / "scenes" / "main.scene"]
        assert scanner.strategy is ScanStrategy.FILE_SEARCH
        assert "editor not responding" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_reset_restores_indexed_strategy(self, project: Path) -> None:
        scanner = ReferenceScanner(OfflineAssetDatabase(project), ContentCache())
        await scanner.find_references("uuid-used")

        scanner.reset()

        assert scanner.strategy is ScanStrategy.INDEXED

    def test_without_database_needs_default_root(self) -> None:
        with pytest.raises(ValueError, match="default search root"):
            ReferenceScanner(None, ContentCache())

    @pytest.mark.asyncio
    async def test_without_database_uses_file_search(self, project: Path) -> None:
        scanner = ReferenceScanner(None, ContentCache(), default_root=project / "assets")

        assert scanner.strategy is ScanStrategy.FILE_SEARCH
        assert await scanner.find_references("uuid-used") == [
            project / "assets" / "scenes" / "main.scene"
        ]


class TestListingCache:
    """Test reuse and invalidation of the bulk listing."""

    @pytest.mark.asyncio
    async def test_listing_reused_for_same_root(self, project: Path) -> None:
        """Test that many lookups under one root share one listing."""
        database = RecordingDatabase(project)
        scanner = ReferenceScanner(database, ContentCache())

        for uuid in ("uuid-used", "uuid-unused", "uuid-orphan"):
            await scanner.find_references(uuid)

        assert database.patterns == ["db://assets/**/*"]

    @pytest.mark.asyncio
    async def test_concurrent_lookups_share_listing(self, project: Path) -> None:
        """Test that lookups racing inside one batch query the listing once."""
        database = RecordingDatabase(project)
        scanner = ReferenceScanner(database, ContentCache())

        results = await asyncio.gather(
            *(scanner.find_references(uuid) for uuid in ("uuid-used", "uuid-unused", "uuid-orphan"))
        )

        assert len(database.patterns) == 1
        assert results[0] == [project / "assets" / "scenes" / "main.scene"]

    @pytest.mark.asyncio
    async def test_root_change_invalidates_listing(self, project: Path) -> None:
        """Test that a different search root triggers a new listing."""
        database = RecordingDatabase(project)
        scanner = ReferenceScanner(database, ContentCache())

        await scanner.find_references("uuid-used", project / "assets" / "scenes")
        await scanner.find_references("uuid-used", project / "assets" / "ui")
        await scanner.find_references("uuid-used", project / "assets" / "ui")

        assert database.patterns == ["db://assets/scenes/**/*", "db://assets/ui/**/*"]

    @pytest.mark.asyncio
    async def test_invalidate_listing_forces_requery(self, project: Path) -> None:
        database = RecordingDatabase(project)
        scanner = ReferenceScanner(database, ContentCache())

        await scanner.find_references("uuid-used")
        scanner.invalidate_listing()
        await scanner.find_references("uuid-used")

        assert len(database.patterns) == 2


class TestScanResilience:
    """Test cooperative yielding and per-file read errors."""

    @pytest.mark.asyncio
    async def test_yields_every_interval(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a 250-file scan yields after files 100 and 200."""
        for i in range(250):
            (tmp_path / f"scene{i:03}.prefab").write_text("{}")
        sleep = AsyncMock()
        monkeypatch.setattr("game_asset_sweeper.scanner.asyncio.sleep", sleep)
        scanner = ReferenceScanner(None, ContentCache(), default_root=tmp_path, yield_interval=100)

        assert await scanner.find_references("uuid-missing") == []

        assert sleep.await_count == 2
        sleep.assert_awaited_with(0)

    @skip_if_root
    @pytest.mark.asyncio
    async def test_unreadable_file_is_not_a_match(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a file that can't be read is skipped, not fatal."""
        readable = tmp_path / "a.prefab"
        locked = tmp_path / "b.prefab"
        readable.write_text("uuid-x")
        locked.write_text("uuid-x")
        locked.chmod(0o000)
        scanner = ReferenceScanner(None, ContentCache(), default_root=tmp_path, verbose=True)

        try:
            refs = await scanner.find_references("uuid-x")
        finally:
            locked.chmod(0o644)

        assert refs == [readable]
        assert f"Cannot read {locked}" in capsys.readouterr().err
