from __future__ import annotations

from .chd import ChdAdapter, split_tracks
from .cso import CsoAdapter
from .image import SingleImageAdapter
from .plain import PlainFileAdapter
from .process import run_tool
from .registry import ContainerRegistry, detect_container_registry
from .rvz import RvzAdapter
from .schema import SevenZipEntry, parse_listing
from .sevenzip import SevenZipAdapter

__all__ = [
    "ChdAdapter",
    "ContainerRegistry",
    "CsoAdapter",
    "PlainFileAdapter",
    "RvzAdapter",
    "SevenZipAdapter",
    "SevenZipEntry",
    "SingleImageAdapter",
    "detect_container_registry",
    "parse_listing",
    "run_tool",
    "split_tracks",
]
