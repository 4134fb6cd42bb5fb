"""Relocation of files kept in lockstep with romfile bookkeeping.

Every successful move is followed by exactly one romfile upsert keyed by the new
path. Moves are journaled so the caller can undo them when the surrounding unit
of work is rolled back.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from romkeeper.common.files import disk_size, free_path, move_file

if TYPE_CHECKING:
    from collections.abc import Container, Iterable

    from romkeeper.config import LibraryConfig
    from romkeeper.domain.model import Rom, Romfile, System
    from romkeeper.domain.ports import RomfileRepository, RomRepository

log = logging.getLogger(__name__)


@dataclass(slots=True)
class QuarantineMover:
    """Place files at canonical paths or in the per-system trash."""

    config: LibraryConfig
    roms: RomRepository
    romfiles: RomfileRepository
    _journal: list[tuple[Path, Path]] = field(default_factory=list)

    @property
    def moves(self) -> tuple[tuple[Path, Path], ...]:
        return tuple(self._journal)

    def place(self, source: Path, destination: Path, roms: Iterable[Rom]) -> Romfile:
        """Move ``source`` to ``destination`` and bind ``roms`` to the resulting romfile."""

        self._move(source, destination)
        romfile = self.romfiles.upsert(path=str(destination), size=disk_size(destination))
        for rom in roms:
            self.roms.bind(rom, romfile)
        return romfile

    def quarantine(self, source: Path, system: System) -> Romfile:
        """Move ``source`` into the system trash; no rom is bound to it."""

        destination = self.trash_destination(source, system)
        log.info('Moving "%s" to trash', source.name)
        self._move(source, destination)
        return self.romfiles.upsert(path=str(destination), size=disk_size(destination))

    def trash_destination(
        self,
        source: Path,
        system: System,
        taken: Container[Path] = (),
    ) -> Path:
        """Free trash path for ``source``.

        Files from inside the system directory keep their relative path so that
        same-named roms of different games stay apart.
        """

        system_directory = self.config.system_directory(system.name)
        if source.is_relative_to(system_directory):
            relative = source.relative_to(system_directory)
        else:
            relative = Path(source.name)
        return free_path(self.config.trash_directory(system.name) / relative, taken)

    def relocate(self, romfile: Romfile, destination: Path) -> Romfile:
        """Move an already recorded romfile, keeping its rom bindings."""

        source = Path(romfile.path)
        self._move(source, destination)
        self.romfiles.update_path(
            romfile,
            path=str(destination),
            size=disk_size(destination),
        )
        return romfile

    def revert(self) -> None:
        """Undo journaled moves, newest first."""

        while self._journal:
            source, destination = self._journal.pop()
            if not destination.exists():
                continue
            if source.parent.is_dir():
                log.warning('Restoring "%s"', source)
                move_file(destination, source)
            else:
                log.warning('Discarding "%s"', destination)
                if destination.is_dir():
                    shutil.rmtree(destination)
                else:
                    destination.unlink()

    def _move(self, source: Path, destination: Path) -> None:
        if move_file(source, destination):
            self._journal.append((source, destination))
