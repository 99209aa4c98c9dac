"""UUID reference search.

This module finds every searchable file (scenes, prefabs, materials,
animations, JSON configs) whose text contains a given asset UUID.

Two strategies are used:

- ``asset-db-api``: one bulk listing of the search root is requested from
  the asset database, filtered to searchable extensions and reused for
  every UUID until the search root changes.
- ``file-search``: the search root is walked directly on disk.

The scanner starts with the indexed strategy when a database is available.
The first time the bulk listing fails or comes back empty it switches to
file search for the rest of the session.
"""

import asyncio
import sys
from collections.abc import Collection, Iterable
from enum import Enum
from pathlib import Path

from .cache import ContentCache
from .constants import DEFAULT_SCAN_YIELD_INTERVAL, SEARCHABLE_EXTENSIONS
from .databases.base import AssetDatabase
from .walker import has_extension, walk_files


class ScanStrategy(str, Enum):
    INDEXED = "asset-db-api"
    FILE_SEARCH = "file-search"


class ReferenceScanner:
    """Searches project files for literal UUID references.

    File contents are read through a shared ContentCache, so scanning the
    same files for many UUIDs reads each file from disk once.

    Example:
        >>> scanner = ReferenceScanner(database, ContentCache())
        >>> refs = await scanner.find_references('a1b2c3', Path('/project/assets'))
    """

    def __init__(
        self,
        database: AssetDatabase | None,
        cache: ContentCache,
        default_root: Path | None = None,
        searchable_extensions: Collection[str] = SEARCHABLE_EXTENSIONS,
        yield_interval: int = DEFAULT_SCAN_YIELD_INTERVAL,
        verbose: bool = False,
    ):
        """Initialize the scanner.

        Args:
            database: Asset database for the indexed strategy, or None to
                      always search the disk
            cache: Content cache shared with the rest of the session
            default_root: Folder searched when no search root is given;
                          defaults to the database's assets folder
            searchable_extensions: Extensions whose text is searched
            yield_interval: Files scanned between cooperative yields
            verbose: Print a warning for unreadable files
        """
        if database is None and default_root is None:
            raise ValueError("A default search root is required without an asset database")

        self.database = database
        self.cache = cache
        self.searchable_extensions = frozenset(searchable_extensions)
        self.yield_interval = yield_interval
        self.verbose = verbose
        self._default_root = default_root

        self.strategy = self._initial_strategy()
        self._listing: list[Path] | None = None
        self._listing_root: Path | None = None
        self._listing_lock = asyncio.Lock()

    @property
    def default_root(self) -> Path:
        if self._default_root is not None:
            return self._default_root
        assert self.database is not None
        return self.database.assets_root

    def is_searchable(self, path: Path) -> bool:
        return has_extension(path, self.searchable_extensions)

    async def find_references(self, uuid: str, search_root: Path | None = None) -> list[Path]:
        """Find every searchable file that contains a UUID.

        Args:
            uuid: Identifier to look for
            search_root: Folder to search; defaults to the project assets

        Returns:
            Paths of files whose text contains the UUID
        """
        if self.strategy is ScanStrategy.INDEXED:
            refs = await self._search_indexed(uuid, search_root)
            if refs is not None:
                return refs

        return await self._search_files(uuid, search_root)

    def read_text(self, path: Path) -> str | None:
        """Read a file through the cache.

        Returns:
            File text, or None if the file cannot be read
        """
        content = self.cache.get(path)
        if content is not None:
            return content

        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            if self.verbose:
                print(f"Warning: Cannot read {path}: {e}", file=sys.stderr)
            return None

        self.cache.put(path, content)
        return content

    def invalidate_listing(self) -> None:
        """Forget the cached bulk listing."""
        self._listing = None
        self._listing_root = None

    def reset(self) -> None:
        """Forget the cached listing and return to the initial strategy."""
        self.invalidate_listing()
        self.strategy = self._initial_strategy()

    def _initial_strategy(self) -> ScanStrategy:
        return ScanStrategy.INDEXED if self.database is not None else ScanStrategy.FILE_SEARCH

    async def _search_indexed(self, uuid: str, search_root: Path | None) -> list[Path] | None:
        listing = await self._get_listing(search_root)
        if listing is None:
            return None
        return await self._scan(listing, uuid)

    async def _get_listing(self, search_root: Path | None) -> list[Path] | None:
        # Concurrent lookups in one engine batch share a single bulk query
        async with self._listing_lock:
            if self.strategy is not ScanStrategy.INDEXED:
                return None

            if self._listing is not None and self._listing_root == search_root:
                return self._listing

            self.invalidate_listing()
            assert self.database is not None
            pattern = self.database.pattern_for(search_root)

            try:
                infos = await self.database.query_assets(pattern)
            except Exception as e:
                print(f"Warning: Asset database query failed ({e}), using file search", file=sys.stderr)
                infos = []

            if not infos:
                self.strategy = ScanStrategy.FILE_SEARCH
                return None

            self._listing = [
                info.file
                for info in infos
                if not info.is_directory and self.is_searchable(info.file)
            ]
            self._listing_root = search_root
            return self._listing

    async def _search_files(self, uuid: str, search_root: Path | None) -> list[Path]:
        root = search_root if search_root is not None else self.default_root
        return await self._scan(walk_files(root, self.is_searchable), uuid)

    async def _scan(self, files: Iterable[Path], uuid: str) -> list[Path]:
        refs: list[Path] = []

        for processed, path in enumerate(files, start=1):
            content = self.read_text(path)
            if content is not None and uuid in content:
                refs.append(path)

            if processed % self.yield_interval == 0:
                await asyncio.sleep(0)

        return refs
