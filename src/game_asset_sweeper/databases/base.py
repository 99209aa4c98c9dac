"""Base abstractions for asset database adapters.

The asset database is the host editor's index of project assets. The
sweeper only needs three requests from it (UUID lookup, bulk listing by
pattern, and a change notification) plus conversions between absolute
paths and ``db://`` URLs.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from ..constants import DB_URL_PREFIX, DEFAULT_ASSETS_DIR


@dataclass(frozen=True)
class AssetInfo:
    """One entry returned by an asset database.

    Attributes:
        file: Absolute path of the asset on disk
        url: ``db://`` URL of the asset
        uuid: Identifier from the sidecar, if the asset has one
        is_directory: True for folder assets
    """

    file: Path
    url: str
    uuid: str | None = None
    is_directory: bool = False


class AssetDatabase(ABC):
    """Abstract base class for asset database adapters.

    Implementations answer the requests the sweeper makes of the host
    editor. Query methods must not raise for unknown assets: a lookup miss
    is ``None`` and an empty listing is ``[]``.
    """

    def __init__(self, project_path: Path):
        self.project_path = Path(project_path).absolute()

    @property
    def assets_root(self) -> Path:
        """Default folder searched for references: ``<project>/assets``."""
        return self.project_path / DEFAULT_ASSETS_DIR

    @abstractmethod
    async def query_asset_info(self, uuid: str) -> AssetInfo | None:
        """Resolve a UUID to its location, or None if unknown."""

    @abstractmethod
    async def query_assets(self, pattern: str) -> list[AssetInfo]:
        """List assets matching a ``db://`` pattern such as ``db://assets/**/*``."""

    @abstractmethod
    async def refresh(self) -> None:
        """Notify the database that files on disk have changed."""

    def to_db_url(self, path: Path) -> str:
        """Convert an absolute path inside the project to a ``db://`` URL.

        Example:
            "<project>/assets/ui/bg.png" -> "db://assets/ui/bg.png"
        """
        relative = os.path.relpath(Path(path).absolute(), self.project_path)
        return DB_URL_PREFIX + relative.replace("\\", "/")

    def to_absolute_path(self, url: str) -> Path:
        """Convert a ``db://`` URL back to an absolute path."""
        relative = url[len(DB_URL_PREFIX):] if url.startswith(DB_URL_PREFIX) else url
        return self.project_path.joinpath(*[part for part in relative.split("/") if part])

    def pattern_for(self, root: Path | None) -> str:
        """Build the recursive listing pattern for a folder.

        With no folder, the whole assets directory is listed.
        """
        if root is None:
            return f"{DB_URL_PREFIX}{DEFAULT_ASSETS_DIR}/**/*"
        return f"{self.to_db_url(root)}/**/*"
