"""Asset database adapters.

This package contains the base interface for asset databases.
Concrete implementations live in the platforms/ directory.
"""

from .base import AssetDatabase, AssetInfo

__all__ = ["AssetDatabase", "AssetInfo"]
