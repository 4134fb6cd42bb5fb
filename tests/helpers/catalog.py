"""Seed catalog rows directly through a SQLAlchemy session."""

from __future__ import annotations

import hashlib
import zlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from romkeeper.domain.model import Game, Header, Rom, System

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def digests_of(content: bytes) -> dict[str, str]:
    return {
        "crc": f"{zlib.crc32(content) & 0xFFFFFFFF:08x}",
        "md5": hashlib.md5(content).hexdigest(),  # noqa: S324
        "sha1": hashlib.sha1(content).hexdigest(),  # noqa: S324
    }


@dataclass
class CatalogSeeder:
    session: Session

    def system(
        self,
        name: str = "Sega - Mega Drive - Genesis",
        *,
        arcade: bool = False,
        header_size: int = 0,
    ) -> System:
        system = System(name=name, arcade=arcade)
        self.session.add(system)
        self.session.flush()
        if header_size:
            self.session.add(Header(system_id=system.key, name="copier header", size=header_size))
            self.session.flush()
        return system

    def game(
        self,
        system: System,
        name: str,
        *,
        jbfolder: bool = False,
        parent: Game | None = None,
    ) -> Game:
        game = Game(
            system_id=system.key,
            name=name,
            jbfolder=jbfolder,
            parent_id=parent.key if parent is not None else None,
        )
        self.session.add(game)
        self.session.flush()
        return game

    def rom(
        self,
        game: Game,
        name: str,
        content: bytes,
        *,
        parent: Rom | None = None,
        without: tuple[str, ...] = (),
    ) -> Rom:
        digests = digests_of(content)
        for algorithm in without:
            digests.pop(algorithm)
        rom = Rom(
            game_id=game.key,
            name=name,
            size=len(content),
            parent_id=parent.key if parent is not None else None,
            **digests,
        )
        self.session.add(rom)
        self.session.flush()
        return rom

    def commit(self) -> None:
        self.session.commit()
