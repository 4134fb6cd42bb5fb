"""Per-transaction state shared by the import and check flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from romkeeper.common.files import scratch_directory
from romkeeper.config.errors import ConfigurationError
from romkeeper.domain.model import HashAlgorithm

from .relocate import QuarantineMover
from .resolve import MatchResolver

if TYPE_CHECKING:
    from pathlib import Path

    from romkeeper.config import LibraryConfig
    from romkeeper.domain.hashing import HashEngine
    from romkeeper.domain.model import ContainerEntry, Fingerprint, Header, Rom, System
    from romkeeper.domain.ports import CatalogRepositories, ContainerAdapter

    from .contracts import Disambiguator, FingerprintEntry


@dataclass(slots=True, kw_only=True)
class ReconciliationContext:
    """Everything one unit of work needs to resolve and relocate files of a system."""

    config: LibraryConfig
    catalog: CatalogRepositories
    system: System
    header: Header | None
    algorithm: HashAlgorithm
    hasher: HashEngine
    mover: QuarantineMover
    resolver: MatchResolver

    @classmethod
    def open(
        cls,
        catalog: CatalogRepositories,
        *,
        config: LibraryConfig,
        system_id: int,
        algorithm: HashAlgorithm,
        hasher: HashEngine,
        disambiguate: Disambiguator,
    ) -> ReconciliationContext:
        system = catalog.systems.get(system_id)
        if system is None:
            raise ConfigurationError(f"Unknown system id {system_id}")
        return cls(
            config=config,
            catalog=catalog,
            system=system,
            header=catalog.headers.get_by_system(system.key),
            algorithm=algorithm,
            hasher=hasher,
            mover=QuarantineMover(config, catalog.roms, catalog.romfiles),
            resolver=MatchResolver(
                roms=catalog.roms,
                games=catalog.games,
                romfiles=catalog.romfiles,
                disambiguate=disambiguate,
            ),
        )

    @property
    def header_size(self) -> int:
        return self.header.size if self.header is not None else 0

    @property
    def system_directory(self) -> Path:
        return self.config.system_directory(self.system.name)

    @property
    def trash_directory(self) -> Path:
        return self.config.trash_directory(self.system.name)

    def algorithm_for(self, rom: Rom) -> HashAlgorithm:
        """The configured algorithm, or CRC for roms that lack that digest."""

        if rom.digest(self.algorithm):
            return self.algorithm
        return HashAlgorithm.CRC

    def fingerprint_file(
        self,
        path: Path,
        *,
        algorithm: HashAlgorithm | None = None,
        header: bool = True,
    ) -> Fingerprint:
        return self.hasher.hash_file(
            path,
            algorithm=algorithm or self.algorithm,
            header_size=self.header_size if header else 0,
        )

    def fingerprint_entry(
        self,
        path: Path,
        adapter: ContainerAdapter,
        entry: ContainerEntry,
        *,
        algorithm: HashAlgorithm | None = None,
    ) -> Fingerprint:
        """Materialize one entry into a scratch directory and hash it there."""

        with scratch_directory(self.config.tmp_directory) as scratch:
            (materialized,) = adapter.materialize(path, [entry], scratch)
            return self.fingerprint_file(materialized, algorithm=algorithm)

    def entry_fingerprinter(self, path: Path, adapter: ContainerAdapter) -> FingerprintEntry:
        def fingerprint(entry: ContainerEntry) -> Fingerprint:
            return self.fingerprint_entry(path, adapter, entry)

        return fingerprint
