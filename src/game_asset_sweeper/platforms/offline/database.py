"""Asset database with no index.

Every listing is empty and every lookup misses, which makes the
reference scanner fall back to searching the disk directly.
"""

from ...databases.base import AssetDatabase, AssetInfo


class OfflineAssetDatabase(AssetDatabase):
    """AssetDatabase used when no editor index is available."""

    async def query_asset_info(self, uuid: str) -> AssetInfo | None:
        return None

    async def query_assets(self, pattern: str) -> list[AssetInfo]:
        return []

    async def refresh(self) -> None:
        return None
