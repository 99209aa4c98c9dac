"""Sidecar metadata handling.

Every tracked asset has a ``<file>.meta`` companion in the same directory.
The sidecar is JSON text carrying at least a ``uuid`` field; anything that
cannot be read or parsed is treated as "no metadata" rather than an error.
"""

import json
from pathlib import Path
from typing import Any

from ..constants import META_SUFFIX

UUID_FIELD = "uuid"


def meta_path_for(path: Path) -> Path:
    """Return the sidecar path for an asset file or folder.

    Example:
        "assets/ui/button.png" -> "assets/ui/button.png.meta"
    """
    return path.with_name(path.name + META_SUFFIX)


def is_meta_file(path: Path) -> bool:
    return path.name.endswith(META_SUFFIX)


def read_sidecar(path: Path) -> dict[str, Any] | None:
    """Read and parse the sidecar of an asset.

    Args:
        path: Path to the asset (not to the .meta file)

    Returns:
        Parsed sidecar dictionary, or None if missing or unparsable
    """
    meta_path = meta_path_for(path)
    try:
        with meta_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return None

    if not isinstance(data, dict):
        return None
    return data


def get_asset_uuid_by_path(path: Path) -> str | None:
    """Resolve an asset file to its UUID via its sidecar.

    Returns:
        The UUID string, or None if the sidecar is missing, unparsable,
        or has no usable uuid field
    """
    meta = read_sidecar(path)
    if meta is None:
        return None

    uuid = meta.get(UUID_FIELD)
    if not isinstance(uuid, str) or not uuid:
        return None
    return uuid
