"""Catalog entities: what the preservation datasets say should exist.

Ownership:
- System owns Games (1:n) and at most one Header
- Game owns Roms (1:n); a Game may be a clone of a parent Game
- Romfile is a filesystem artifact backing 0..n Roms
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from romkeeper.domain.model.base import Entity
from romkeeper.domain.model.enums import HashAlgorithm


@dataclass(eq=False, kw_only=True)
class System(Entity):
    name: str
    arcade: bool = False
    complete: bool = False


@dataclass(eq=False, kw_only=True)
class Header(Entity):
    """Fixed-length prefix excluded from identity hashing for one system."""

    system_id: int
    name: str = ""
    size: int = 0


@dataclass(eq=False, kw_only=True)
class Game(Entity):
    system_id: int
    name: str
    jbfolder: bool = False
    parent_id: int | None = None
    complete: bool = False


@dataclass(eq=False, kw_only=True)
class Romfile(Entity):
    path: str
    size: int

    @property
    def file_name(self) -> str:
        return PurePath(self.path).name


@dataclass(eq=False, kw_only=True)
class Rom(Entity):
    """One catalogued file. ``parent_id`` marks roms inherited from the parent game's set."""

    game_id: int
    name: str
    size: int
    crc: str | None = None
    md5: str | None = None
    sha1: str | None = None
    romfile_id: int | None = None
    parent_id: int | None = None

    @property
    def filed(self) -> bool:
        return self.romfile_id is not None

    @property
    def extension(self) -> str:
        return PurePath(self.name).suffix.lstrip(".").lower()

    def digest(self, algorithm: HashAlgorithm) -> str | None:
        match algorithm:
            case HashAlgorithm.CRC:
                return self.crc
            case HashAlgorithm.MD5:
                return self.md5
            case HashAlgorithm.SHA1:
                return self.sha1

    def matches(self, size: int, digest: str, algorithm: HashAlgorithm) -> bool:
        """Size and digest must both agree; either alone never counts."""

        expected = self.digest(algorithm)
        return expected is not None and self.size == size and expected == digest


@dataclass(eq=False, kw_only=True)
class Setting(Entity):
    key: str
    value: str | None = None
