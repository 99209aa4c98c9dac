"""Game Asset Sweeper.

This package finds assets that nothing in a game project references,
moves them into a restorable quarantine folder, and cleans up after them.
Assets are identified by the UUID in their ``.meta`` sidecar and counted
as used when a scene, prefab, material, animation or JSON file contains
that UUID, or when a referenced skeleton or bitmap font depends on them.
"""

# Core library interface
from .session import AnalysisSession
from .registry import DatabaseRegistry
from .databases.base import AssetDatabase, AssetInfo

# Building blocks
from .cache import ContentCache
from .catalog import build_catalog
from .config import SweepConfig
from .dependencies import DependencyResolver
from .engine import UsageAnalysisEngine
from .quarantine import QuarantineManager, temp_folder_for
from .replacer import UuidReplacer, load_uuid_map
from .scanner import ReferenceScanner, ScanStrategy

# Core utilities
from .core import AssetRecord, ScanResult, UsageVerdict
from .core import validate_scan_report, validate_scan_report_with_error_details
from .exceptions import (
    FolderNotFoundError,
    NoScanResultError,
    OperationInProgressError,
    QuarantineError,
    SweeperError,
    UuidMapError,
)

from .cli import main

__version__ = "0.1.0"

# Auto-discover and register all platforms
DatabaseRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "AnalysisSession",
    "DatabaseRegistry",
    "AssetDatabase",
    "AssetInfo",
    "SweepConfig",
    # Building blocks
    "ContentCache",
    "build_catalog",
    "DependencyResolver",
    "UsageAnalysisEngine",
    "QuarantineManager",
    "temp_folder_for",
    "UuidReplacer",
    "load_uuid_map",
    "ReferenceScanner",
    "ScanStrategy",
    # Core utilities
    "AssetRecord",
    "ScanResult",
    "UsageVerdict",
    "validate_scan_report",
    "validate_scan_report_with_error_details",
    # Exceptions
    "SweeperError",
    "FolderNotFoundError",
    "NoScanResultError",
    "OperationInProgressError",
    "QuarantineError",
    "UuidMapError",
    "main",
]
