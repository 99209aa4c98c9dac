"""Offline platform for the asset database.

Registers a backend without an index so every reference search goes
straight to the files on disk.
"""

from pathlib import Path

from .database import OfflineAssetDatabase

from ...registry import DatabaseRegistry


def _create_offline_database(project_path: Path, **kwargs) -> OfflineAssetDatabase:
    return OfflineAssetDatabase(project_path)


DatabaseRegistry.register_factory("offline", _create_offline_database)

__all__ = ["OfflineAssetDatabase"]
