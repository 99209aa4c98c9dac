"""Usage analysis over an asset catalog.

The engine resolves dependency families first, then checks the catalog in
fixed-size batches. Assets inside a batch are checked concurrently and the
engine yields to the event loop once after each batch.
"""

import asyncio
from collections.abc import Callable
from pathlib import Path

from .constants import DEFAULT_BATCH_SIZE
from .core.types import AssetRecord, UsageVerdict
from .dependencies import DependencyResolver
from .scanner import ReferenceScanner

# on_progress(current, total, asset_name); current is 1-based
ProgressCallback = Callable[[int, int, str], None]


class UsageAnalysisEngine:
    """Produces a usage verdict for every asset of a catalog.

    Example:
        >>> engine = UsageAnalysisEngine(scanner, DependencyResolver(scanner))
        >>> verdicts = await engine.analyze(build_catalog(Path('/project/assets/ui')))
        >>> unused = [v for v in verdicts if not v.is_used]
    """

    def __init__(
        self,
        scanner: ReferenceScanner,
        resolver: DependencyResolver,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        self.scanner = scanner
        self.resolver = resolver
        self.batch_size = batch_size

    async def analyze(
        self,
        assets: list[AssetRecord],
        search_root: Path | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> list[UsageVerdict]:
        """Check every asset for direct and dependency usage.

        Args:
            assets: Catalog to analyze
            search_root: Folder searched for references; defaults to the
                         project assets folder
            on_progress: Called as each asset starts processing

        Returns:
            One verdict per asset, in catalog order
        """
        if not assets:
            return []

        dependency_used = await self.resolver.resolve(assets, search_root)

        total = len(assets)
        verdicts: list[UsageVerdict] = []

        for start in range(0, total, self.batch_size):
            batch = assets[start : start + self.batch_size]
            checks = [
                self._check(asset, start + offset + 1, total, dependency_used, search_root, on_progress)
                for offset, asset in enumerate(batch)
            ]
            verdicts.extend(await asyncio.gather(*checks))
            await asyncio.sleep(0)

        return verdicts

    async def _check(
        self,
        asset: AssetRecord,
        position: int,
        total: int,
        dependency_used: set[str],
        search_root: Path | None,
        on_progress: ProgressCallback | None,
    ) -> UsageVerdict:
        if on_progress:
            on_progress(position, total, asset.name)

        refs = await self.scanner.find_references(asset.uuid, search_root)
        # Flagged only when the family is the sole reason the asset is kept
        return UsageVerdict.from_record(
            asset,
            references=refs,
            used_as_dependency=not refs and asset.uuid in dependency_used,
        )
