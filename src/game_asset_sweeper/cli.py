"""Command-line interface for the asset sweeper.

This module provides the ``asset-sweeper`` entry point: scan a folder for
unused assets, quarantine them, restore or delete the quarantine, replace
UUIDs in bulk, and list images.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from .config import SweepConfig
from .constants import DEFAULT_BATCH_SIZE
from .core.formatting import format_bytes, format_duration
from .core.types import QuarantineReport, ScanResult
from .core.validator import validate_scan_report_with_error_details
from .exceptions import NoScanResultError, SweeperError
from .images import collect_image_stats
from .registry import DatabaseRegistry
from .replacer import load_uuid_map
from .session import AnalysisSession


def ask_confirmation(prompt: str) -> bool:
    """Ask a yes/no question on the terminal; anything but yes is no."""
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def create_session(args: argparse.Namespace) -> AnalysisSession:
    DatabaseRegistry.discover_platforms()
    database = DatabaseRegistry.create(args.asset_db, project_path=Path(args.project).absolute())
    config = SweepConfig(batch_size=args.batch_size, verbose=args.verbose)
    return AnalysisSession(database, config)


def print_progress(current: int, total: int, name: str) -> None:
    if current == total or current % 100 == 0:
        print(f"Checked {current}/{total} assets ({name})", file=sys.stderr)


def print_scan_summary(result: ScanResult) -> None:
    stats = result.stats()
    print(
        f"Analysis complete: {stats['total']} assets in {format_duration(result.duration_ms)} "
        f"({stats['used']} used, {stats['unused']} unused, "
        f"{stats['used_as_dependency']} kept by dependencies; search: {result.strategy})",
        file=sys.stderr,
    )


def print_warnings(warnings: list[str]) -> None:
    for warning in warnings:
        print(f"Warning: {warning}", file=sys.stderr)


def report_exit_code(report: QuarantineReport) -> int:
    print_warnings(report.warnings)
    return 1 if report.errors else 0


async def run_scan(session: AnalysisSession, args: argparse.Namespace) -> int:
    folder = await session.resolve_folder(args.folder)
    search_root = await session.resolve_folder(args.search) if args.search else None

    result = await session.scan(folder, search_root, on_progress=print_progress)
    print_scan_summary(result)

    report = result.to_report()
    is_valid, error_msg = validate_scan_report_with_error_details(report)
    if not is_valid:
        print("Error: Scan report validation failed:", file=sys.stderr)
        print(error_msg, file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(json.dumps(report, indent=2), encoding="utf-8")
        print(f"Report saved to {args.output}", file=sys.stderr)
    else:
        json.dump(report, sys.stdout, indent=2)
        print()
    return 0


async def run_move(session: AnalysisSession, args: argparse.Namespace) -> int:
    folder = await session.resolve_folder(args.folder)
    search_root = await session.resolve_folder(args.search) if args.search else None

    result = await session.scan(folder, search_root, on_progress=print_progress)
    print_scan_summary(result)

    unused = result.unused
    if not unused:
        print("No unused assets to move.", file=sys.stderr)
        return 0

    temp_folder = session.quarantine_folder(folder)
    prompt = f"Move {len(unused)} unused assets to {temp_folder}?"
    if temp_folder.exists():
        prompt += " The existing quarantine folder will be REPLACED, not merged."
    if not args.yes and not ask_confirmation(prompt):
        print("Move operation cancelled.", file=sys.stderr)
        return 0

    return report_exit_code(await session.move_unused())


async def run_restore(session: AnalysisSession, args: argparse.Namespace) -> int:
    folder = await session.resolve_folder(args.folder)
    return report_exit_code(await session.restore_from_temp(folder))


async def run_delete(session: AnalysisSession, args: argparse.Namespace) -> int:
    folder = await session.resolve_folder(args.folder)

    def confirm(temp_folder: Path) -> bool:
        if args.yes:
            return True
        return ask_confirmation(
            f"Permanently delete temp folder {temp_folder}? This action CANNOT be undone!"
        )

    return report_exit_code(await session.delete_temp(confirm, folder))


async def run_replace(session: AnalysisSession, args: argparse.Namespace) -> int:
    mapping = load_uuid_map(Path(args.map))
    print(f"Loaded UUID map: {len(mapping)} mappings", file=sys.stderr)

    folder = await session.resolve_folder(args.folder)
    report = await session.replace_uuids(folder, mapping)
    print_warnings(report.warnings)
    print(f"Replaced {report.replaced} occurrences", file=sys.stderr)
    return 1 if report.errors else 0


async def run_images(session: AnalysisSession, args: argparse.Namespace) -> int:
    folder = await session.resolve_folder(args.folder)
    stats = collect_image_stats(folder)

    print(f"Images: {stats.total} (png {stats.png}, jpg {stats.jpg}, webp {stats.webp})")
    print(f"Total size: {format_bytes(stats.total_size)}")
    if args.verbose:
        for image in stats.details:
            print(f"  {image.path}  {format_bytes(image.size)}")
    return 0


COMMANDS = {
    "scan": run_scan,
    "move": run_move,
    "restore": run_restore,
    "delete": run_delete,
    "replace-uuids": run_replace,
    "images": run_images,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find, quarantine and clean up unused game assets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Report unused assets under assets/ui, searching the whole project
  asset-sweeper --project . scan --folder assets/ui > report.json

  # Quarantine them into assets/ui_temp_unused
  asset-sweeper --project . move --folder assets/ui

  # Put them back
  asset-sweeper --project . restore --folder assets/ui
        """,
    )
    parser.add_argument("--project", default=".", help="Project root (default: current directory)")
    parser.add_argument(
        "--asset-db",
        default="filesystem",
        help="Asset database backend: filesystem (index from disk) or offline (no index)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Assets checked concurrently (default: {DEFAULT_BATCH_SIZE})",
    )
    parser.add_argument("--verbose", action="store_true", help="Print every file handled")

    subparsers = parser.add_subparsers(dest="command", required=True)

    folder_help = "Folder as a path, db:// URL or folder UUID"

    scan_parser = subparsers.add_parser("scan", help="Report used and unused assets")
    scan_parser.add_argument("--folder", required=True, help=folder_help)
    scan_parser.add_argument("--search", help="Only search for references in this folder")
    scan_parser.add_argument("--output", help="Write the JSON report here instead of stdout")

    move_parser = subparsers.add_parser("move", help="Scan, then quarantine unused assets")
    move_parser.add_argument("--folder", required=True, help=folder_help)
    move_parser.add_argument("--search", help="Only search for references in this folder")
    move_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    restore_parser = subparsers.add_parser("restore", help="Restore quarantined assets")
    restore_parser.add_argument("--folder", required=True, help=folder_help)

    delete_parser = subparsers.add_parser("delete", help="Permanently delete the quarantine")
    delete_parser.add_argument("--folder", required=True, help=folder_help)
    delete_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    replace_parser = subparsers.add_parser("replace-uuids", help="Replace UUIDs from a JSON map")
    replace_parser.add_argument("--folder", required=True, help=folder_help)
    replace_parser.add_argument("--map", required=True, help="JSON file of old UUID -> new UUID")

    images_parser = subparsers.add_parser("images", help="Count and size the images in a folder")
    images_parser.add_argument("--folder", required=True, help=folder_help)

    return parser


async def run(args: argparse.Namespace) -> int:
    session = create_session(args)
    return await COMMANDS[args.command](session, args)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the asset sweeper."""
    args = build_parser().parse_args(argv)

    try:
        exit_code = asyncio.run(run(args))
    except NoScanResultError as e:
        print(f"Warning: {e}", file=sys.stderr)
        exit_code = 0
    except SweeperError as e:
        print(f"Error: {e}", file=sys.stderr)
        exit_code = 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
