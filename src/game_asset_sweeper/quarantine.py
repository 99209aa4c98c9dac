"""Quarantine folder management.

Unused assets are moved into a sibling folder named
``<scan folder>_temp_unused`` that mirrors their relative paths, so they
can be restored or permanently deleted later. Each asset travels with its
``.meta`` sidecar.

Folder lifecycle::

    absent --move_unused--> populated --restore_from_temp--> absent
                                      --delete_temp-------> absent

``move_unused`` on a populated folder replaces it; quarantines are never
merged. Per-file failures are recorded in the returned report and never
abort the batch.
"""

import shutil
import sys
from collections.abc import Callable
from pathlib import Path

from .constants import TEMP_FOLDER_SUFFIX
from .core.metadata import is_meta_file, meta_path_for
from .core.types import ItemResult, QuarantineReport, UsageVerdict
from .databases.base import AssetDatabase
from .exceptions import QuarantineError
from .walker import remove_empty_directories, walk_files

ConfirmCallback = Callable[[Path], bool]


def temp_folder_for(scan_root: Path) -> Path:
    """Quarantine folder of a scan root.

    Example:
        "/project/assets/ui" -> "/project/assets/ui_temp_unused"
    """
    scan_root = Path(scan_root).absolute()
    return scan_root.parent / f"{scan_root.name}{TEMP_FOLDER_SUFFIX}"


class QuarantineManager:
    """Moves unused assets into quarantine and back.

    Example:
        >>> manager = QuarantineManager(database)
        >>> report = await manager.move_unused(result.verdicts, result.root)
        >>> print(report.moved_count, report.errors)
    """

    def __init__(self, database: AssetDatabase | None = None, verbose: bool = False):
        """Initialize the manager.

        Args:
            database: Asset database notified after every change, if any
            verbose: Print a line for every file handled
        """
        self.database = database
        self.verbose = verbose

    async def move_unused(self, verdicts: list[UsageVerdict], scan_root: Path) -> QuarantineReport:
        """Move every unused asset into a fresh quarantine folder.

        All copies are made before any original is deleted. An original is
        only deleted once its copy succeeded.

        Args:
            verdicts: Verdicts of the scan of ``scan_root``
            scan_root: Folder the verdicts were computed for

        Returns:
            Report with one item per unused asset

        Raises:
            QuarantineError: If the quarantine folder cannot be recreated
        """
        scan_root = Path(scan_root).absolute()
        temp_folder = temp_folder_for(scan_root)
        report = QuarantineReport(operation="move", temp_folder=temp_folder)

        unused = [verdict for verdict in verdicts if not verdict.is_used]
        if not unused:
            report.warnings.append("No unused assets to move")
            return report

        try:
            if temp_folder.exists():
                shutil.rmtree(temp_folder)
            temp_folder.mkdir(parents=True)
        except OSError as e:
            raise QuarantineError(f"Cannot create quarantine folder {temp_folder}: {e}", report) from e

        copied: list[UsageVerdict] = []
        for verdict in unused:
            if not verdict.path.exists():
                report.items.append(ItemResult(verdict.path, "missing"))
                continue

            target = temp_folder / verdict.relative_path
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(verdict.path, target)
                source_meta = meta_path_for(verdict.path)
                if source_meta.exists():
                    shutil.copy2(source_meta, meta_path_for(target))
            except OSError as e:
                self._fail(report, verdict.path, f"copy failed: {e}")
                continue

            self._log(f"Copied: {verdict.relative_path} (+ .meta)")
            copied.append(verdict)

        for verdict in copied:
            try:
                verdict.path.unlink(missing_ok=True)
                meta_path_for(verdict.path).unlink(missing_ok=True)
            except OSError as e:
                self._fail(report, verdict.path, f"remove failed: {e}")
                continue

            self._log(f"Removed: {verdict.relative_path}")
            report.items.append(ItemResult(verdict.path, "moved"))

        remove_empty_directories(scan_root)
        await self._refresh(report)

        print(
            f"Moved {report.moved_count} assets to {temp_folder} ({report.errors} errors)",
            file=sys.stderr,
        )
        return report

    async def restore_from_temp(self, scan_root: Path) -> QuarantineReport:
        """Move every quarantined asset back to its original location.

        The quarantine folder is removed afterwards even if some files
        could not be restored.
        """
        scan_root = Path(scan_root).absolute()
        temp_folder = temp_folder_for(scan_root)
        report = QuarantineReport(operation="restore", temp_folder=temp_folder)

        if not temp_folder.is_dir():
            report.warnings.append(f"Temp folder not found: {temp_folder}")
            return report

        for temp_file in walk_files(temp_folder, lambda path: not is_meta_file(path)):
            original = scan_root / temp_file.relative_to(temp_folder)
            try:
                original.parent.mkdir(parents=True, exist_ok=True)
                shutil.move(temp_file, original)
                temp_meta = meta_path_for(temp_file)
                if temp_meta.exists():
                    shutil.move(temp_meta, meta_path_for(original))
            except OSError as e:
                self._fail(report, temp_file, f"restore failed: {e}")
                continue

            self._log(f"Restored: {original}")
            report.items.append(ItemResult(original, "restored"))

        try:
            shutil.rmtree(temp_folder)
        except OSError as e:
            report.warnings.append(f"Could not remove temp folder {temp_folder}: {e}")

        await self._refresh(report)

        print(
            f"Restored {report.restored_count} files ({report.errors} errors)",
            file=sys.stderr,
        )
        return report

    async def delete_temp(self, scan_root: Path, confirm: ConfirmCallback) -> QuarantineReport:
        """Permanently delete the quarantine folder.

        Args:
            scan_root: Folder whose quarantine is deleted
            confirm: Asked with the quarantine path; nothing is deleted
                     unless it returns True
        """
        temp_folder = temp_folder_for(scan_root)
        report = QuarantineReport(operation="delete", temp_folder=temp_folder)

        if not temp_folder.is_dir():
            report.warnings.append(f"Temp folder not found: {temp_folder}")
            return report

        if not confirm(temp_folder):
            report.warnings.append("Delete operation cancelled")
            return report

        try:
            shutil.rmtree(temp_folder)
        except OSError as e:
            self._fail(report, temp_folder, f"delete failed: {e}")
        else:
            report.items.append(ItemResult(temp_folder, "deleted"))
            print(f"Temp folder deleted: {temp_folder}", file=sys.stderr)

        await self._refresh(report)
        return report

    async def _refresh(self, report: QuarantineReport) -> None:
        if self.database is None:
            return
        try:
            await self.database.refresh()
        except Exception as e:
            report.warnings.append(f"Asset database refresh failed: {e}")
            print(f"Warning: Asset database refresh failed: {e}", file=sys.stderr)

    def _fail(self, report: QuarantineReport, path: Path, error: str) -> None:
        print(f"Error: {path}: {error}", file=sys.stderr)
        report.items.append(ItemResult(path, "failed", error))

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message, file=sys.stderr)
