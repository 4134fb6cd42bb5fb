"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import and_, exists, not_, select, update

from romkeeper.adapters.sqlalchemy.mappings import (
    game_table,
    header_table,
    rom_table,
    romfile_table,
    setting_table,
    system_table,
)
from romkeeper.domain.model import (
    Game,
    HashAlgorithm,
    Header,
    Rom,
    Romfile,
    System,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Column, ColumnElement, Select
    from sqlalchemy.orm import Session


def _digest_column(algorithm: HashAlgorithm) -> Column[str]:
    match algorithm:
        case HashAlgorithm.CRC:
            return rom_table.c.crc
        case HashAlgorithm.MD5:
            return rom_table.c.md5
        case HashAlgorithm.SHA1:
            return rom_table.c.sha1


class SqlAlchemySystemRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, system: System) -> None:
        self.session.add(system)

    def get(self, system_id: int) -> System | None:
        return self.session.get(System, system_id)

    def get_by_name(self, name: str) -> System | None:
        stmt = select(System).where(system_table.c.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def list_all(self) -> Sequence[System]:
        stmt = select(System).order_by(system_table.c.name)
        return self.session.execute(stmt).scalars().all()

    def update_completion(self, system_id: int) -> None:
        incomplete_games = exists().where(
            and_(game_table.c.system_id == system_table.c.id, not_(game_table.c.complete))
        )
        stmt = (
            update(system_table)
            .where(system_table.c.id == system_id)
            .values(complete=not_(incomplete_games))
        )
        self.session.execute(stmt)
        self.session.expire_all()


class SqlAlchemyHeaderRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, header: Header) -> None:
        self.session.add(header)

    def get_by_system(self, system_id: int) -> Header | None:
        stmt = select(Header).where(header_table.c.system_id == system_id)
        return self.session.execute(stmt).scalar_one_or_none()


class SqlAlchemyGameRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, game: Game) -> None:
        self.session.add(game)

    def get(self, game_id: int) -> Game | None:
        return self.session.get(Game, game_id)

    def update_completion(self, system_id: int) -> None:
        """A game is complete once every rom of its own set is backed by a file."""

        missing_roms = exists().where(
            and_(
                rom_table.c.game_id == game_table.c.id,
                rom_table.c.parent_id.is_(None),
                rom_table.c.romfile_id.is_(None),
            )
        )
        stmt = (
            update(game_table)
            .where(game_table.c.system_id == system_id)
            .values(complete=not_(missing_roms))
        )
        self.session.execute(stmt)
        self.session.expire_all()


class SqlAlchemyRomRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, rom: Rom) -> None:
        self.session.add(rom)

    def get(self, rom_id: int) -> Rom | None:
        return self.session.get(Rom, rom_id)

    def find_unfiled_by_hash(
        self,
        *,
        size: int,
        digest: str,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> Sequence[Rom]:
        stmt = self._by_hash(size=size, digest=digest, system_id=system_id, algorithm=algorithm)
        stmt = stmt.where(rom_table.c.romfile_id.is_(None))
        return self.session.execute(stmt).scalars().all()

    def find_filed_by_hash(
        self,
        *,
        size: int,
        digest: str,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> Sequence[Rom]:
        stmt = self._by_hash(size=size, digest=digest, system_id=system_id, algorithm=algorithm)
        stmt = stmt.where(rom_table.c.romfile_id.is_not(None))
        return self.session.execute(stmt).scalars().all()

    def find_unfiled_by_name_and_hash(
        self,
        *,
        name: str,
        size: int,
        digest: str,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> Sequence[Rom]:
        stmt = self._by_hash(size=size, digest=digest, system_id=system_id, algorithm=algorithm)
        stmt = stmt.where(rom_table.c.name == name).where(rom_table.c.romfile_id.is_(None))
        return self.session.execute(stmt).scalars().all()

    def find_by_game_no_parents(self, game_id: int) -> Sequence[Rom]:
        stmt = (
            select(Rom)
            .where(rom_table.c.game_id == game_id)
            .where(rom_table.c.parent_id.is_(None))
            .order_by(rom_table.c.id)
        )
        return self.session.execute(stmt).scalars().all()

    def find_filed_by_system(self, system_id: int) -> Sequence[Rom]:
        stmt = (
            select(Rom)
            .join(game_table, rom_table.c.game_id == game_table.c.id)
            .where(game_table.c.system_id == system_id)
            .where(rom_table.c.romfile_id.is_not(None))
            .order_by(rom_table.c.id)
        )
        return self.session.execute(stmt).scalars().all()

    def bind(self, rom: Rom, romfile: Romfile) -> None:
        rom.romfile_id = romfile.key
        self.session.flush()

    def _by_hash(
        self,
        *,
        size: int,
        digest: str,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> Select[tuple[Rom]]:
        conditions: list[ColumnElement[bool]] = [
            game_table.c.system_id == system_id,
            rom_table.c.size == size,
            _digest_column(algorithm) == digest.lower(),
            rom_table.c.parent_id.is_(None),
        ]
        return (
            select(Rom)
            .join(game_table, rom_table.c.game_id == game_table.c.id)
            .where(*conditions)
            .order_by(rom_table.c.id)
        )


class SqlAlchemyRomfileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, romfile_id: int) -> Romfile | None:
        return self.session.get(Romfile, romfile_id)

    def get_by_path(self, path: str) -> Romfile | None:
        stmt = select(Romfile).where(romfile_table.c.path == path)
        return self.session.execute(stmt).scalar_one_or_none()

    def find_by_system(self, system_id: int) -> Sequence[Romfile]:
        """Romfiles backing at least one rom of the system, in path order."""

        backs_system = exists().where(
            and_(
                rom_table.c.romfile_id == romfile_table.c.id,
                rom_table.c.game_id == game_table.c.id,
                game_table.c.system_id == system_id,
            )
        )
        stmt = select(Romfile).where(backs_system).order_by(romfile_table.c.path)
        return self.session.execute(stmt).scalars().all()

    def upsert(self, *, path: str, size: int) -> Romfile:
        romfile = self.get_by_path(path)
        if romfile is None:
            romfile = Romfile(path=path, size=size)
            self.session.add(romfile)
        else:
            romfile.size = size
        self.session.flush()
        return romfile

    def update_path(self, romfile: Romfile, *, path: str, size: int) -> None:
        romfile.path = path
        romfile.size = size
        self.session.flush()


class SqlAlchemySettingRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_value(self, key: str) -> str | None:
        stmt = select(setting_table.c.value).where(setting_table.c.key == key)
        return self.session.execute(stmt).scalar_one_or_none()
