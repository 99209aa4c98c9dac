"""JSON Schema validation for scan reports and UUID replace maps.

Schemas live in ``game_asset_sweeper/schemas/`` next to this package.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .types import ScanReport

# game_asset_sweeper/core/validator.py -> game_asset_sweeper/schemas/
SCHEMA_DIR = Path(__file__).parent.parent / "schemas"
SCAN_REPORT_SCHEMA = "scan_report.schema.json"
UUID_MAP_SCHEMA = "uuid_map.schema.json"


def load_schema(name: str) -> dict[str, Any]:
    """Load a JSON schema from the package's schema directory.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    schema_path = SCHEMA_DIR / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_scan_report(report: ScanReport) -> None:
    """Validate a scan report against its schema.

    Raises:
        ValidationError: If the report doesn't conform to the schema
    """
    jsonschema.validate(instance=report, schema=load_schema(SCAN_REPORT_SCHEMA))


def validate_uuid_map(mapping: Any) -> None:
    """Validate a decoded UUID replace map.

    Raises:
        ValidationError: If the map isn't a non-empty object of non-empty strings
    """
    jsonschema.validate(instance=mapping, schema=load_schema(UUID_MAP_SCHEMA))


def _describe(error: ValidationError) -> str:
    error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
    return f"Validation error at {error_path}: {error.message}"


def validate_scan_report_with_error_details(report: ScanReport) -> tuple[bool, str | None]:
    """Validate a scan report and return a user-facing error message.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_scan_report(report)
        return True, None
    except ValidationError as e:
        return False, _describe(e)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"


def validate_uuid_map_with_error_details(mapping: Any) -> tuple[bool, str | None]:
    """Validate a UUID replace map and return a user-facing error message."""
    try:
        validate_uuid_map(mapping)
        return True, None
    except ValidationError as e:
        return False, _describe(e)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
