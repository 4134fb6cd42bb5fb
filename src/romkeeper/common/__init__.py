from __future__ import annotations

from .files import disk_size, free_path, move_file, prune_empty_directories, scratch_directory

__all__ = [
    "disk_size",
    "free_path",
    "move_file",
    "prune_empty_directories",
    "scratch_directory",
]
