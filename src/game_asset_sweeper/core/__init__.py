"""Core utilities shared by every sweeper component.

This package contains the data model, sidecar metadata reading,
schema validation and display formatting.
"""

from .formatting import format_bytes, format_duration
from .metadata import get_asset_uuid_by_path, meta_path_for, read_sidecar
from .types import (
    AssetRecord,
    DependencyGroup,
    ItemResult,
    QuarantineReport,
    ReplaceReport,
    ScanReport,
    ScanResult,
    UsageVerdict,
)
from .validator import (
    validate_scan_report,
    validate_scan_report_with_error_details,
    validate_uuid_map,
    validate_uuid_map_with_error_details,
)

__all__ = [
    "AssetRecord",
    "DependencyGroup",
    "ItemResult",
    "QuarantineReport",
    "ReplaceReport",
    "ScanReport",
    "ScanResult",
    "UsageVerdict",
    "format_bytes",
    "format_duration",
    "get_asset_uuid_by_path",
    "meta_path_for",
    "read_sidecar",
    "validate_scan_report",
    "validate_scan_report_with_error_details",
    "validate_uuid_map",
    "validate_uuid_map_with_error_details",
]
