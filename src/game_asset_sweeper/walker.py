"""Directory traversal and empty-directory cleanup.

Traversal never aborts because one subtree is unreadable: every
directory or entry that raises ``OSError`` is skipped and the walk
continues with its siblings.
"""

import os
from collections.abc import Callable, Collection
from pathlib import Path

PathPredicate = Callable[[Path], bool]


def has_extension(path: Path, extensions: Collection[str]) -> bool:
    """Check a file's extension (case-insensitive) against a set like {".png"}."""
    return path.suffix.lower() in extensions


def extension_filter(extensions: Collection[str]) -> PathPredicate:
    """Build a walk predicate accepting only the given extensions."""
    return lambda path: has_extension(path, extensions)


def walk_files(root: Path, predicate: PathPredicate | None = None) -> list[Path]:
    """Recursively list files under a directory.

    Entries are visited in name order so the result is stable for a stable
    tree. Symlinks to directories are neither descended into nor listed.

    Args:
        root: Directory to walk
        predicate: Optional filter applied to each file path

    Returns:
        Absolute paths of matching files; empty if root doesn't exist
    """
    files: list[Path] = []
    _walk(Path(root).absolute(), predicate, files)
    return files


def _walk(directory: Path, predicate: PathPredicate | None, files: list[Path]) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError:
        return

    for entry in entries:
        path = directory / entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            # False for symlinks to directories and for dangling links
            is_file = entry.is_file()
        except OSError:
            continue

        if is_dir:
            _walk(path, predicate, files)
        elif is_file and (predicate is None or predicate(path)):
            files.append(path)


def remove_empty_directories(root: Path) -> list[Path]:
    """Remove directories left empty, deepest first.

    A directory whose only contents are subdirectories that become empty
    is removed too. The root itself is never removed.

    Returns:
        Directories that were removed
    """
    removed: list[Path] = []
    root = Path(root).absolute()
    if root.is_dir():
        _prune(root, root, removed)
    return removed


def _prune(directory: Path, root: Path, removed: list[Path]) -> None:
    try:
        with os.scandir(directory) as it:
            subdirs = [Path(entry.path) for entry in it if entry.is_dir(follow_symlinks=False)]
    except OSError:
        return

    for subdir in subdirs:
        _prune(subdir, root, removed)

    if directory == root:
        return

    try:
        if not any(directory.iterdir()):
            directory.rmdir()
            removed.append(directory)
    except OSError:
        pass
