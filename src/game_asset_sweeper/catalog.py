"""Asset catalog construction.

Walks a folder and builds one AssetRecord per supported asset that has a
readable sidecar carrying a UUID. Assets without a usable sidecar cannot be
tracked and are left out of the catalog.
"""

import os
import sys
from collections.abc import Collection
from pathlib import Path

from .constants import SUPPORTED_ASSET_EXTENSIONS
from .core.metadata import get_asset_uuid_by_path
from .core.types import AssetRecord
from .walker import extension_filter, walk_files


def build_catalog(
    root_path: Path,
    extensions: Collection[str] = SUPPORTED_ASSET_EXTENSIONS,
    verbose: bool = False,
) -> list[AssetRecord]:
    """Collect every trackable asset under a folder.

    Args:
        root_path: Folder to scan
        extensions: Asset extensions to include (lowercase, with dot)
        verbose: Print a warning for each asset skipped for missing metadata

    Returns:
        Asset records in traversal order; empty if the folder doesn't exist
    """
    root = Path(root_path).absolute()
    assets: list[AssetRecord] = []

    for file_path in walk_files(root, extension_filter(extensions)):
        uuid = get_asset_uuid_by_path(file_path)
        if uuid is None:
            if verbose:
                print(f"Warning: Skipping {file_path}: no usable .meta sidecar", file=sys.stderr)
            continue

        assets.append(
            AssetRecord(
                path=file_path,
                uuid=uuid,
                name=file_path.name,
                relative_path=os.path.relpath(file_path, root),
            )
        )

    return assets
