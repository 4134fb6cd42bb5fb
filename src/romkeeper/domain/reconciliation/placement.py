"""Canonical destination rules.

- arcade systems and jbfolder games keep one subdirectory per game, since rom
  names are only unique within a game
- disc updates and DLC (``.pkg``/``.rap``) carry unreadable rom names, so the game
  name is used instead
- everything else is filed under its catalog rom name
"""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Sequence

    from romkeeper.domain.model import Game, Rom, System

UPDATE_EXTENSIONS: Final[frozenset[str]] = frozenset({"pkg", "rap"})


def extension_of(path: PurePath | str) -> str:
    return PurePath(path).suffix.lstrip(".").lower()


def with_extension(path: Path, extension: str) -> Path:
    """Swap the last suffix of ``path`` for ``extension`` (or append it when there is none)."""

    return path.with_suffix(f".{extension}")


def rom_destination(system_directory: Path, system: System, game: Game, rom: Rom) -> Path:
    """Destination of one extracted or plain rom."""

    if system.arcade or game.jbfolder:
        return system_directory / game.name / rom.name
    if rom.extension in UPDATE_EXTENSIONS:
        return system_directory / f"{game.name}.{rom.extension}"
    return system_directory / rom.name


def archive_destination(
    system_directory: Path,
    system: System,
    game: Game,
    roms: Sequence[Rom],
    archive_extension: str,
) -> Path:
    """Destination of an archive repacked whole for one game."""

    if len(roms) == 1:
        rom = roms[0]
        if not (system.arcade or rom.extension in UPDATE_EXTENSIONS):
            return with_extension(system_directory / rom.name, archive_extension)
    return system_directory / f"{game.name}.{archive_extension}"


def image_destination(system_directory: Path, rom: Rom, image_extension: str) -> Path:
    """Destination of a compressed disk image named after the rom it decodes to."""

    return with_extension(system_directory / rom.name, image_extension)
