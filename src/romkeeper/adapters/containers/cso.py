"""Compressed ISO images (CSO) decoded with ``maxcso``."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Final

from romkeeper.domain.model import ContainerKind

from .image import SingleImageAdapter

if TYPE_CHECKING:
    from pathlib import Path

MAXCSO_TOOL: Final[str] = "maxcso"


class CsoAdapter(SingleImageAdapter):
    extensions: ClassVar[frozenset[str]] = frozenset({"cso"})
    kind: ClassVar[ContainerKind] = ContainerKind.IMAGE

    def __init__(self, executable: str = MAXCSO_TOOL) -> None:
        self.executable = executable

    def decode_command(self, path: Path, target: Path) -> list[str]:
        return [self.executable, "--decompress", str(path), "-o", str(target)]
