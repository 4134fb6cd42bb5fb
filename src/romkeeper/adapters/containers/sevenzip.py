"""Multi-entry archives handled by the ``7z`` command line tool."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar, Final

from romkeeper.domain.model import ContainerEntry, ContainerKind
from romkeeper.domain.reconciliation.errors import DecodeError

from .process import run_tool
from .schema import parse_listing

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

log = logging.getLogger(__name__)

SEVEN_ZIP_TOOL: Final[str] = "7z"


class SevenZipAdapter:
    """Lists, extracts and renames members of ``.7z`` and ``.zip`` archives."""

    kind: ClassVar[ContainerKind] = ContainerKind.ARCHIVE
    extensions: ClassVar[frozenset[str]] = frozenset({"7z", "zip"})

    def __init__(self, executable: str = SEVEN_ZIP_TOOL) -> None:
        self.executable = executable

    def list_entries(self, path: Path) -> list[ContainerEntry]:
        stdout = run_tool([self.executable, "l", "-slt", "--", str(path)], path=path)
        return [member.to_entry() for member in parse_listing(stdout)]

    def materialize(
        self,
        path: Path,
        entries: Sequence[ContainerEntry],
        scratch: Path,
    ) -> list[Path]:
        if not entries:
            return []
        command = [
            self.executable,
            "x",
            "-y",
            "-spd",
            f"-o{scratch}",
            "--",
            str(path),
            *(entry.name for entry in entries),
        ]
        run_tool(command, path=path)
        extracted = [scratch / entry.name for entry in entries]
        for entry, target in zip(entries, extracted, strict=True):
            if not target.is_file():
                raise DecodeError(path, command, f"{entry.name} was not extracted")
        return extracted

    def rename_entry(self, path: Path, old_name: str, new_name: str) -> None:
        run_tool([self.executable, "rn", "--", str(path), old_name, new_name], path=path)
