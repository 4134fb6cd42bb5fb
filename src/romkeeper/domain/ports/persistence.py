"""Ports for the catalog store.

The catalog itself is populated elsewhere (dat imports); reconciliation only reads
it and maintains romfile bookkeeping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from romkeeper.domain.model import Game, HashAlgorithm, Header, Rom, Romfile, System


@runtime_checkable
class SystemRepository(Protocol):
    def add(self, system: System) -> None: ...

    def get(self, system_id: int) -> System | None: ...

    def get_by_name(self, name: str) -> System | None: ...

    def list_all(self) -> Sequence[System]: ...

    def update_completion(self, system_id: int) -> None: ...


@runtime_checkable
class HeaderRepository(Protocol):
    def get_by_system(self, system_id: int) -> Header | None: ...


@runtime_checkable
class GameRepository(Protocol):
    def get(self, game_id: int) -> Game | None: ...

    def update_completion(self, system_id: int) -> None: ...


@runtime_checkable
class RomRepository(Protocol):
    """Rom lookups and romfile association bookkeeping."""

    def get(self, rom_id: int) -> Rom | None: ...

    def find_unfiled_by_hash(
        self,
        *,
        size: int,
        digest: str,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> Sequence[Rom]: ...

    def find_filed_by_hash(
        self,
        *,
        size: int,
        digest: str,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> Sequence[Rom]: ...

    def find_unfiled_by_name_and_hash(
        self,
        *,
        name: str,
        size: int,
        digest: str,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> Sequence[Rom]: ...

    def find_by_game_no_parents(self, game_id: int) -> Sequence[Rom]: ...

    def find_filed_by_system(self, system_id: int) -> Sequence[Rom]: ...

    def bind(self, rom: Rom, romfile: Romfile) -> None: ...


@runtime_checkable
class RomfileRepository(Protocol):
    def get(self, romfile_id: int) -> Romfile | None: ...

    def get_by_path(self, path: str) -> Romfile | None: ...

    def find_by_system(self, system_id: int) -> Sequence[Romfile]: ...

    def upsert(self, *, path: str, size: int) -> Romfile: ...

    def update_path(self, romfile: Romfile, *, path: str, size: int) -> None: ...


@runtime_checkable
class SettingRepository(Protocol):
    def get_value(self, key: str) -> str | None: ...
