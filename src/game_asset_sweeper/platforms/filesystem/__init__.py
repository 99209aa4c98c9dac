"""Filesystem platform for the asset database.

This platform indexes a project's assets folder straight from disk,
allowing the sweeper to run outside the host editor.
"""

from pathlib import Path

from .database import LocalAssetDatabase

# Auto-register with the registry
from ...registry import DatabaseRegistry


def _create_local_database(project_path: Path, **kwargs) -> LocalAssetDatabase:
    """Factory function for creating filesystem databases.

    Args:
        project_path: Project root containing the assets folder
        **kwargs: Additional parameters (unused for filesystem)
    """
    return LocalAssetDatabase(project_path)


# Auto-register at module import
DatabaseRegistry.register_factory("filesystem", _create_local_database)

__all__ = ["LocalAssetDatabase"]
