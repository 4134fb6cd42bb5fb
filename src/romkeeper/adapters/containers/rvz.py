"""GameCube/Wii RVZ images converted back to ISO with ``dolphin-tool``."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Final

from romkeeper.domain.model import ContainerKind

from .image import SingleImageAdapter

if TYPE_CHECKING:
    from pathlib import Path

DOLPHIN_TOOL: Final[str] = "dolphin-tool"


class RvzAdapter(SingleImageAdapter):
    extensions: ClassVar[frozenset[str]] = frozenset({"rvz"})
    kind: ClassVar[ContainerKind] = ContainerKind.IMAGE

    def __init__(self, executable: str = DOLPHIN_TOOL) -> None:
        self.executable = executable

    def decode_command(self, path: Path, target: Path) -> list[str]:
        return [
            self.executable,
            "convert",
            "-f",
            "iso",
            "-i",
            str(path),
            "-o",
            str(target),
        ]
