"""File walker - enumerates candidate source files.

TIER 1: May import from core only.

Traversal is lexicographic and never follows directory symlinks, so an
unchanged tree always yields the same sequence.
"""

import os
from collections.abc import Collection, Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from lib.logger import get_logger

logger = get_logger("walker")


@dataclass(frozen=True)
class WalkedFile:
    """A file found during traversal."""

    path: Path
    rel_path: str  # forward-slash path relative to the walk root
    depth: int  # directory components between the walk root and the file

    @property
    def name(self) -> str:
        return PurePosixPath(self.rel_path).name

    @property
    def rel_dir(self) -> str:
        return PurePosixPath(self.rel_path).parent.as_posix()


def has_extension(name: str, extensions: Collection[str]) -> bool:
    """Check a file name against an extension allow-list (case-insensitive)."""
    return os.path.splitext(name)[1].lower() in extensions


def walk_files(
    root: Path,
    ignore_dirs: Collection[str] = (),
    extensions: Collection[str] | None = None,
) -> Iterator[WalkedFile]:
    """Lazily walk a tree, skipping ignored directories.

    Args:
        root: Directory to walk.
        ignore_dirs: Directory names never descended into.
        extensions: Allowed file extensions (None allows every file).

    Yields:
        WalkedFile for each candidate, in lexicographic path order.
    """
    if not root.is_dir():
        logger.debug(f"Walk root does not exist: {root}")
        return

    yield from _walk_dir(root, (), ignore_dirs, extensions)


def _walk_dir(
    directory: Path,
    parts: tuple[str, ...],
    ignore_dirs: Collection[str],
    extensions: Collection[str] | None,
) -> Iterator[WalkedFile]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.warning(f"Cannot list {directory}: {e}")
        return

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                if entry.name in ignore_dirs:
                    continue
                yield from _walk_dir(Path(entry.path), (*parts, entry.name), ignore_dirs, extensions)
            elif entry.is_file():
                if extensions is not None and not has_extension(entry.name, extensions):
                    continue
                yield WalkedFile(
                    path=Path(entry.path),
                    rel_path="/".join((*parts, entry.name)),
                    depth=len(parts),
                )
        except OSError as e:
            logger.warning(f"Cannot stat {entry.path}: {e}")
