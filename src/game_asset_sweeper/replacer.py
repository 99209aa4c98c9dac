"""Bulk UUID replacement.

Rewrites scene, prefab, animation and JSON files so that every literal
occurrence of an old UUID becomes its replacement, as listed in a JSON
map of ``{"old-uuid": "new-uuid", ...}``.
"""

import json
import sys
from collections.abc import Collection
from pathlib import Path

from .constants import REPLACE_TARGET_EXTENSIONS
from .core.types import ItemResult, ReplaceReport
from .core.validator import validate_uuid_map_with_error_details
from .exceptions import UuidMapError
from .walker import extension_filter, walk_files


def load_uuid_map(path: Path) -> dict[str, str]:
    """Load and validate a UUID replace map.

    Raises:
        UuidMapError: If the file is missing, not JSON, or not a non-empty
                      object of string to string
    """
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            mapping = json.load(f)
    except OSError as e:
        raise UuidMapError(f"Cannot read UUID map {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise UuidMapError(f"UUID map {path} is not valid JSON: {e}") from e

    is_valid, error_msg = validate_uuid_map_with_error_details(mapping)
    if not is_valid:
        raise UuidMapError(f"Invalid UUID map {path}: {error_msg}")
    return mapping


def replace_in_text(text: str, mapping: dict[str, str]) -> tuple[str, int]:
    """Apply every mapping to a text.

    Returns:
        Tuple of (new_text, number_of_replacements)
    """
    count = 0
    for old_uuid, new_uuid in mapping.items():
        occurrences = text.count(old_uuid)
        if occurrences:
            text = text.replace(old_uuid, new_uuid)
            count += occurrences
    return text, count


class UuidReplacer:
    """Applies a UUID map to every target file under a folder.

    Example:
        >>> replacer = UuidReplacer(load_uuid_map(Path('uuid-map.json')))
        >>> report = replacer.run(Path('/project/assets/ui'))
    """

    def __init__(
        self,
        mapping: dict[str, str],
        extensions: Collection[str] = REPLACE_TARGET_EXTENSIONS,
        verbose: bool = False,
    ):
        if not mapping:
            raise UuidMapError("UUID map is empty")
        self.mapping = mapping
        self.extensions = extensions
        self.verbose = verbose

    def replace_in_file(self, path: Path) -> tuple[ItemResult, int]:
        """Rewrite one file if any mapped UUID occurs in it.

        Returns:
            Tuple of (item result, number_of_replacements)
        """
        # newline="" keeps CRLF line endings byte for byte
        try:
            with path.open("r", encoding="utf-8", newline="") as f:
                text = f.read()
            new_text, count = replace_in_text(text, self.mapping)
            if count:
                with path.open("w", encoding="utf-8", newline="") as f:
                    f.write(new_text)
        except (OSError, UnicodeDecodeError) as e:
            return ItemResult(path, "failed", str(e)), 0

        return ItemResult(path, "modified" if count else "unchanged"), count

    def run(self, folder: Path) -> ReplaceReport:
        """Process every target file under a folder."""
        folder = Path(folder).absolute()
        report = ReplaceReport(folder=folder)

        files = walk_files(folder, extension_filter(self.extensions))
        if not files:
            report.warnings.append(f"No files found to process in {folder}")
            return report

        for path in files:
            item, count = self.replace_in_file(path)
            report.items.append(item)
            report.replaced += count

            if item.failed:
                print(f"Error: {path}: {item.error}", file=sys.stderr)
            elif count and self.verbose:
                print(f"Replaced {count} UUID(s) in {path}", file=sys.stderr)

        print(
            f"Complete: {report.processed} files processed, {report.modified} files modified, "
            f"{report.errors} errors",
            file=sys.stderr,
        )
        return report
