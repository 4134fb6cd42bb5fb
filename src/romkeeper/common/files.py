"""Filesystem primitives shared by relocation and decoding."""

from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Container, Iterator

log = logging.getLogger(__name__)


def move_file(source: Path, destination: Path) -> bool:
    """Move ``source`` to ``destination``, creating parent directories.

    Renames when both paths share a volume, otherwise copies then deletes the
    source. Returns ``False`` when there was nothing to do. An existing
    ``destination`` is never replaced: ``FileExistsError`` is raised instead.
    """

    if source == destination:
        return False
    if destination.exists() or destination.is_symlink():
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), str(destination))
    destination.parent.mkdir(parents=True, exist_ok=True)
    log.info('Moving "%s" to "%s"', source, destination)
    try:
        os.replace(source, destination)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        if source.is_dir():
            shutil.copytree(source, destination)
            shutil.rmtree(source)
        else:
            shutil.copy2(source, destination)
            source.unlink()
    return True


def free_path(path: Path, taken: Container[Path] = ()) -> Path:
    """Return ``path``, or ``name (n).ext`` beside it if ``path`` exists or is in ``taken``."""

    candidate = path
    counter = 1
    while candidate.exists() or candidate.is_symlink() or candidate in taken:
        candidate = path.with_name(f"{path.stem} ({counter}){path.suffix}")
        counter += 1
    return candidate


def disk_size(path: Path) -> int:
    """Byte length of a file, or the summed length of every file below a directory."""

    if path.is_dir():
        return sum(child.stat().st_size for child in path.rglob("*") if child.is_file())
    return path.stat().st_size


def prune_empty_directories(root: Path) -> None:
    """Remove every empty directory below ``root``, deepest first, then ``root`` itself if empty."""

    for directory in sorted((path for path in root.rglob("*") if path.is_dir()), reverse=True):
        if not any(directory.iterdir()):
            log.info('Removing empty directory "%s"', directory)
            directory.rmdir()
    if root.is_dir() and not any(root.iterdir()):
        log.info('Removing empty directory "%s"', root)
        root.rmdir()


@contextmanager
def scratch_directory(root: Path) -> Iterator[Path]:
    """Yield a private directory under ``root`` that is removed on every exit path."""

    root.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(dir=root, prefix="romkeeper-") as name:
        yield Path(name)
