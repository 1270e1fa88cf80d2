"""File copy helpers used when preparing and merging generated trees."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


class CollisionError(FileExistsError):
    """Raised when a merge would overwrite files already present in the destination."""

    def __init__(self, dest: Path, paths: list[str]):
        listed = ", ".join(paths)
        super().__init__(f"refusing to overwrite existing files in {dest}: {listed}")
        self.dest = dest
        self.paths = paths


def copy_file(src: Path, dst: Path) -> None:
    """Copy a single file, creating the destination's parent directory."""
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dst)


def copy_file_pattern(src_dir: Path, dst_dir: Path, pattern: str) -> list[Path]:
    """Copy files in ``src_dir`` matching a glob ``pattern`` into ``dst_dir``."""
    copied: list[Path] = []
    for match in sorted(src_dir.glob(pattern)):
        if not match.is_file():
            continue
        target = dst_dir / match.name
        copy_file(match, target)
        copied.append(target)
    return copied


def copy_tree(dest: Path, source: Path, *, allow_overwrite: bool = False) -> list[str]:
    """Copy every file under ``source`` into ``dest``, preserving layout.

    With ``allow_overwrite`` false, all collisions are collected up front and
    reported in one :class:`CollisionError` before anything is written, so a
    refused merge leaves ``dest`` untouched. Returns the copied relative paths.
    """
    dest = Path(dest)
    source = Path(source)
    if not source.is_dir():
        raise NotADirectoryError(f"merge source is not a directory: {source}")

    planned = sorted(path for path in source.rglob("*") if path.is_file())
    relative = [path.relative_to(source) for path in planned]

    if not allow_overwrite:
        collisions = [rel.as_posix() for rel in relative if (dest / rel).exists()]
        if collisions:
            raise CollisionError(dest, collisions)

    for path, rel in zip(planned, relative):
        copy_file(path, dest / rel)
    logger.debug("merged %d file(s) from %s into %s", len(relative), source, dest)
    return [rel.as_posix() for rel in relative]
