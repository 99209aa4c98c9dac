"""Disk-backed asset database.

This module provides an AssetDatabase that indexes a project's assets
folder directly from disk, reading UUIDs from ``.meta`` sidecars. It
stands in for the host editor's database when the sweeper runs on its own.
"""

from fnmatch import fnmatchcase
from pathlib import Path

from ...constants import META_SUFFIX
from ...core.metadata import get_asset_uuid_by_path, is_meta_file
from ...databases.base import AssetDatabase, AssetInfo
from ...walker import walk_files

RECURSIVE_SUFFIX = "/**/*"


class LocalAssetDatabase(AssetDatabase):
    """Asset database built by walking ``<project>/assets``.

    The index is built lazily on the first query and dropped by
    ``refresh()``, so changes on disk are picked up on the next query.

    Example:
        >>> db = LocalAssetDatabase(Path('/path/to/project'))
        >>> infos = await db.query_assets('db://assets/**/*')
    """

    def __init__(self, project_path: Path):
        super().__init__(project_path)
        self._index: list[AssetInfo] | None = None
        self._by_uuid: dict[str, AssetInfo] = {}

    async def query_asset_info(self, uuid: str) -> AssetInfo | None:
        self._ensure_index()
        return self._by_uuid.get(uuid)

    async def query_assets(self, pattern: str) -> list[AssetInfo]:
        index = self._ensure_index()

        if pattern.endswith(RECURSIVE_SUFFIX):
            prefix = pattern[: -len(RECURSIVE_SUFFIX)] + "/"
            return [info for info in index if info.url.startswith(prefix)]

        return [info for info in index if fnmatchcase(info.url, pattern)]

    async def refresh(self) -> None:
        self._index = None
        self._by_uuid = {}

    def _ensure_index(self) -> list[AssetInfo]:
        if self._index is None:
            self._index = self._build_index()
            self._by_uuid = {info.uuid: info for info in self._index if info.uuid}
        return self._index

    def _build_index(self) -> list[AssetInfo]:
        index: list[AssetInfo] = []

        for path in walk_files(self.assets_root):
            if is_meta_file(path):
                # Folder assets are only visible through their sidecar
                target = path.with_name(path.name[: -len(META_SUFFIX)])
                if target.is_dir():
                    index.append(
                        AssetInfo(
                            file=target,
                            url=self.to_db_url(target),
                            uuid=get_asset_uuid_by_path(target),
                            is_directory=True,
                        )
                    )
                continue

            index.append(
                AssetInfo(
                    file=path,
                    url=self.to_db_url(path),
                    uuid=get_asset_uuid_by_path(path),
                )
            )

        return index
