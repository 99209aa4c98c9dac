"""Asset database registry.

This module provides a central registry of asset database factories so
the CLI and the session can be built against any registered backend by
name, with platforms registering themselves on import.
"""

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .databases.base import AssetDatabase


class DatabaseRegistry:
    """Central registry for asset database factories.

    Platforms register a factory when their package is imported, and
    ``discover_platforms`` imports every package under ``platforms/``.
    """

    _factories: dict[str, Callable[..., "AssetDatabase"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "AssetDatabase"]) -> None:
        """Register a factory function for creating databases.

        Args:
            name: Name of the backend (e.g., 'filesystem', 'offline')
            factory: Callable that creates an AssetDatabase instance

        Example:
            >>> def create_local(project_path: Path) -> LocalAssetDatabase:
            ...     return LocalAssetDatabase(project_path)
            >>> DatabaseRegistry.register_factory('filesystem', create_local)
        """
        cls._factories[name] = factory

    @classmethod
    def create(cls, name: str, **kwargs) -> "AssetDatabase":
        """Create a database from a registered factory.

        Args:
            name: Name of the registered backend
            **kwargs: Arguments passed to the factory (typically project_path)

        Raises:
            ValueError: If name is not registered
        """
        if name not in cls._factories:
            available = ", ".join(cls._factories.keys()) or "none"
            raise ValueError(f"Unknown asset database: '{name}'. Available: {available}")

        return cls._factories[name](**kwargs)

    @classmethod
    def list_databases(cls) -> list[str]:
        """List all registered backend names.

        Example:
            >>> DatabaseRegistry.list_databases()
            ['filesystem', 'offline']
        """
        return list(cls._factories.keys())

    @classmethod
    def discover_platforms(cls) -> None:
        """Import every platform package so it registers itself.

        Platforms whose imports fail are skipped.
        """
        platforms_dir = Path(__file__).parent / "platforms"

        if not platforms_dir.exists():
            return

        for platform_path in sorted(platforms_dir.iterdir()):
            if not platform_path.is_dir():
                continue

            if not (platform_path / "__init__.py").exists():
                continue

            try:
                importlib.import_module(
                    f".platforms.{platform_path.name}",
                    package="game_asset_sweeper",
                )
            except ImportError:
                pass
