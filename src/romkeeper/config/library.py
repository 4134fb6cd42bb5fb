"""Library layout configuration: where roms live and where decoders may scratch."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_path

TRASH_DIRECTORY_NAME: Final[str] = "Trash"


@dataclass(frozen=True, slots=True)
class LibraryConfig:
    """Root directories shared by every reconciliation flow.

    Built once at startup and passed by reference; nothing mutates it afterwards.
    """

    rom_directory: Path
    tmp_directory: Path

    def system_directory(self, system_name: str) -> Path:
        return self.rom_directory / system_name

    def trash_directory(self, system_name: str) -> Path:
        return self.system_directory(system_name) / TRASH_DIRECTORY_NAME

    def ensure_directories(self) -> None:
        self.rom_directory.mkdir(parents=True, exist_ok=True)
        self.tmp_directory.mkdir(parents=True, exist_ok=True)


def get_library_config() -> LibraryConfig:
    rom_directory = env_path("ROMKEEPER_ROM_DIRECTORY", Path.home() / "Emulation")
    tmp_directory = env_path("ROMKEEPER_TMP_DIRECTORY", Path(tempfile.gettempdir()))
    return LibraryConfig(
        rom_directory=rom_directory.expanduser().resolve(),
        tmp_directory=tmp_directory.expanduser().resolve(),
    )
