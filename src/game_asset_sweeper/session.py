"""Analysis session.

An AnalysisSession owns everything one user-facing run of the sweeper
needs: the content cache, the reference scanner with its cached listing,
the usage engine, the quarantine manager and the latest scan result.
Nothing is shared between sessions.

Top-level operations are mutually exclusive. Starting one while another
is running raises OperationInProgressError instead of waiting.
"""

import asyncio
import sys
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from .cache import ContentCache
from .catalog import build_catalog
from .config import SweepConfig
from .constants import DB_URL_PREFIX
from .core.types import QuarantineReport, ReplaceReport, ScanResult
from .databases.base import AssetDatabase
from .dependencies import DependencyResolver
from .engine import ProgressCallback, UsageAnalysisEngine
from .exceptions import FolderNotFoundError, NoScanResultError, OperationInProgressError
from .quarantine import ConfirmCallback, QuarantineManager, temp_folder_for
from .replacer import UuidReplacer
from .scanner import ReferenceScanner

# A folder given as a filesystem path, a db:// URL, or an asset UUID
FolderRef = Path | str


class AnalysisSession:
    """One sweeper session bound to an asset database.

    Example:
        >>> session = AnalysisSession(LocalAssetDatabase(Path('/project')))
        >>> result = await session.scan(Path('/project/assets/ui'))
        >>> report = await session.move_unused()
    """

    def __init__(self, database: AssetDatabase, config: SweepConfig | None = None):
        self.database = database
        self.config = config or SweepConfig()

        self.cache = ContentCache(self.config.cache_max_entries, self.config.cache_max_bytes)
        self.scanner = ReferenceScanner(
            database,
            self.cache,
            searchable_extensions=self.config.searchable_extensions,
            yield_interval=self.config.scan_yield_interval,
            verbose=self.config.verbose,
        )
        self.resolver = DependencyResolver(self.scanner)
        self.engine = UsageAnalysisEngine(self.scanner, self.resolver, self.config.batch_size)
        self.quarantine = QuarantineManager(database, verbose=self.config.verbose)

        self.scan_result: ScanResult | None = None
        self.scan_root: Path | None = None
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def _exclusive(self) -> AsyncIterator[None]:
        if self._lock.locked():
            raise OperationInProgressError("Another operation is already running")
        async with self._lock:
            yield

    async def resolve_folder(self, ref: FolderRef) -> Path:
        """Resolve a folder reference to an existing directory.

        Relative paths are taken relative to the project root.

        Args:
            ref: Filesystem path, ``db://`` URL, or folder UUID

        Raises:
            FolderNotFoundError: If the reference doesn't name a directory
        """
        if isinstance(ref, Path):
            path = self.database.project_path / ref
        elif ref.startswith(DB_URL_PREFIX):
            path = self.database.to_absolute_path(ref)
        elif (self.database.project_path / ref).exists():
            path = self.database.project_path / ref
        else:
            info = await self.database.query_asset_info(ref)
            if info is None:
                raise FolderNotFoundError(f"Unable to resolve folder: {ref}")
            path = info.file

        path = path.absolute()
        if not path.is_dir():
            raise FolderNotFoundError(f"Not a directory: {path}")
        return path

    async def scan(
        self,
        scan_root: Path,
        search_root: Path | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ScanResult:
        """Analyze every asset under a folder and keep the result.

        Args:
            scan_root: Folder whose assets are checked
            search_root: Folder searched for references; defaults to the
                         project assets folder
            on_progress: Progress callback, see UsageAnalysisEngine.analyze
        """
        async with self._exclusive():
            started = time.monotonic()
            scan_root = Path(scan_root).absolute()
            if search_root is not None:
                search_root = Path(search_root).absolute()

            assets = build_catalog(
                scan_root,
                self.config.supported_extensions,
                verbose=self.config.verbose,
            )
            print(f"Found {len(assets)} assets to analyze in {scan_root}", file=sys.stderr)

            verdicts = await self.engine.analyze(assets, search_root, on_progress)

            self.scan_root = scan_root
            self.scan_result = ScanResult(
                root=scan_root,
                verdicts=verdicts,
                search_root=search_root,
                strategy=self.scanner.strategy.value,
                duration_ms=int((time.monotonic() - started) * 1000),
            )
            return self.scan_result

    async def move_unused(self) -> QuarantineReport:
        """Quarantine the unused assets of the current scan result.

        Raises:
            NoScanResultError: If no scan has been run
        """
        async with self._exclusive():
            result = self._require_scan_result()
            report = await self.quarantine.move_unused(result.verdicts, result.root)
            # Verdicts no longer describe the tree once files have moved
            self.scan_result = None
            self._invalidate_contents()
            return report

    async def restore_from_temp(self, scan_root: Path | None = None) -> QuarantineReport:
        """Restore quarantined assets of a folder (default: last scan root)."""
        async with self._exclusive():
            root = scan_root if scan_root is not None else self._require_scan_root()
            report = await self.quarantine.restore_from_temp(root)
            self.scan_result = None
            self._invalidate_contents()
            return report

    async def delete_temp(
        self,
        confirm: ConfirmCallback,
        scan_root: Path | None = None,
    ) -> QuarantineReport:
        """Permanently delete a folder's quarantine after confirmation."""
        async with self._exclusive():
            root = scan_root if scan_root is not None else self._require_scan_root()
            return await self.quarantine.delete_temp(root, confirm)

    async def replace_uuids(self, folder: Path, mapping: dict[str, str]) -> ReplaceReport:
        """Apply a UUID map to every scene, prefab, animation and JSON file."""
        async with self._exclusive():
            report = UuidReplacer(mapping, verbose=self.config.verbose).run(folder)
            self._invalidate_contents()
            if report.modified:
                try:
                    await self.database.refresh()
                except Exception as e:
                    report.warnings.append(f"Asset database refresh failed: {e}")
            return report

    def reset(self) -> None:
        """Drop cached file contents, the cached listing and the scan result."""
        self.cache.clear()
        self.scanner.reset()
        self.scan_result = None
        self.scan_root = None

    def cache_stats(self) -> dict[str, Any]:
        return self.cache.stats()

    def quarantine_folder(self, scan_root: Path) -> Path:
        return temp_folder_for(scan_root)

    def _require_scan_result(self) -> ScanResult:
        if self.scan_result is None:
            raise NoScanResultError("No scan data available. Run a scan first")
        return self.scan_result

    def _require_scan_root(self) -> Path:
        if self.scan_root is None:
            raise NoScanResultError("No scan data available. Run a scan first")
        return self.scan_root

    def _invalidate_contents(self) -> None:
        self.cache.clear()
        self.scanner.invalidate_listing()
