"""Content-hash identity resolution for container entries.

Responsibilities of this stage:
- compute (or reuse) the fingerprint of every entry
- look the fingerprint up among unfiled catalog roms of one system
- classify each entry as MATCHED/AMBIGUOUS/NO_MATCH/ALREADY_FILED
- never hand the same rom to two entries of one pass

Out of scope for this stage:
- filesystem moves
- romfile bookkeeping
- commit/flush
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

from romkeeper.domain.model import Fingerprint, HashAlgorithm

from .contracts import (
    AlreadyFiledResolution,
    AmbiguousResolution,
    MatchedResolution,
    NoMatchResolution,
    RomCandidate,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from romkeeper.domain.model import ContainerEntry, Game, Header, Rom, System
    from romkeeper.domain.ports import GameRepository, RomfileRepository, RomRepository

    from .contracts import Disambiguator, EntryResolution, FingerprintEntry

log = logging.getLogger(__name__)


def can_use_listing_crc(
    entry: ContainerEntry,
    *,
    header: Header | None,
    algorithm: HashAlgorithm,
) -> bool:
    """The listing CRC covers the whole member, so a header or another algorithm rules it out."""

    return bool(entry.crc) and header is None and algorithm is HashAlgorithm.CRC


def same_trailing_path(entry_name: str, rom_name: str) -> bool:
    """True when the entry path ends with every component of the rom name."""

    rom_parts = PurePath(rom_name).parts
    if not rom_parts:
        return False
    return PurePath(entry_name).parts[-len(rom_parts) :] == rom_parts


def first_candidate(candidates: Sequence[RomCandidate]) -> Rom | None:
    """Deterministic disambiguation for non-interactive runs: lowest rom id wins."""

    if not candidates:
        return None
    return min(candidates, key=lambda candidate: candidate.rom.key).rom


def decline_candidates(_candidates: Sequence[RomCandidate]) -> Rom | None:
    return None


@dataclass(slots=True)
class MatchResolver:
    """Resolve entries against the catalog for one system and algorithm."""

    roms: RomRepository
    games: GameRepository
    romfiles: RomfileRepository
    disambiguate: Disambiguator

    def resolve(
        self,
        entries: Sequence[ContainerEntry],
        *,
        system: System,
        header: Header | None,
        algorithm: HashAlgorithm,
        fingerprint: FingerprintEntry,
    ) -> list[EntryResolution]:
        claimed: set[int] = set()
        resolutions: list[EntryResolution] = []
        for entry in entries:
            log.info('Processing "%s"', entry.name)
            if can_use_listing_crc(entry, header=header, algorithm=algorithm):
                key = Fingerprint(size=entry.size, digest=(entry.crc or "").lower())
            else:
                key = fingerprint(entry)
            resolution = self.resolve_fingerprint(
                entry,
                key,
                system=system,
                algorithm=algorithm,
                claimed=claimed,
            )
            if isinstance(resolution, MatchedResolution):
                claimed.add(resolution.rom.key)
            resolutions.append(resolution)
        return resolutions

    def resolve_fingerprint(
        self,
        entry: ContainerEntry,
        key: Fingerprint,
        *,
        system: System,
        algorithm: HashAlgorithm,
        claimed: set[int] | None = None,
    ) -> EntryResolution:
        taken = claimed or set()
        candidates = [
            rom
            for rom in self.roms.find_unfiled_by_hash(
                size=key.size,
                digest=key.digest,
                system_id=system.key,
                algorithm=algorithm,
            )
            if rom.key not in taken
        ]
        if not candidates:
            return self._unmatched(entry, key, system=system, algorithm=algorithm)
        return self._select(entry, key, candidates)

    def resolve_candidates(
        self,
        entry: ContainerEntry,
        key: Fingerprint,
        candidates: Sequence[Rom],
    ) -> EntryResolution:
        """Classify a candidate set obtained through a narrower lookup."""

        if not candidates:
            log.info("No match")
            return NoMatchResolution(entry=entry, fingerprint=key, reason="no_exact_match")
        return self._select(entry, key, list(candidates))

    def _select(
        self,
        entry: ContainerEntry,
        key: Fingerprint,
        candidates: list[Rom],
    ) -> EntryResolution:
        if len(candidates) == 1:
            return self._matched(entry, key, candidates[0], reason="exact_match")

        by_name = [rom for rom in candidates if same_trailing_path(entry.name, rom.name)]
        if len(by_name) == 1:
            return self._matched(entry, key, by_name[0], reason="basename_match")

        offered = tuple(self._candidate(rom) for rom in candidates)
        chosen = self.disambiguate(offered)
        if chosen is None:
            log.info('Ambiguous match for "%s" (%d candidates)', entry.name, len(offered))
            return AmbiguousResolution(
                entry=entry,
                fingerprint=key,
                candidates=offered,
                reason="multiple_exact_matches",
            )
        return self._matched(entry, key, chosen, reason="disambiguated")

    def _matched(
        self,
        entry: ContainerEntry,
        key: Fingerprint,
        rom: Rom,
        *,
        reason: str,
    ) -> EntryResolution:
        if rom.romfile_id is not None:
            romfile = self.romfiles.get(rom.romfile_id)
            log.info('Duplicate of "%s"', romfile.path if romfile else rom.name)
            return AlreadyFiledResolution(
                entry=entry,
                fingerprint=key,
                rom=rom,
                romfile=romfile,
                reason="already_filed",
            )
        log.info('Matches "%s"', rom.name)
        return MatchedResolution(
            entry=entry,
            fingerprint=key,
            rom=rom,
            game=self._game(rom),
            reason=reason,
        )

    def _unmatched(
        self,
        entry: ContainerEntry,
        key: Fingerprint,
        *,
        system: System,
        algorithm: HashAlgorithm,
    ) -> EntryResolution:
        filed = self.roms.find_filed_by_hash(
            size=key.size,
            digest=key.digest,
            system_id=system.key,
            algorithm=algorithm,
        )
        if filed:
            rom = filed[0]
            romfile = self.romfiles.get(rom.romfile_id) if rom.romfile_id is not None else None
            log.info('Duplicate of "%s"', romfile.path if romfile else rom.name)
            return AlreadyFiledResolution(
                entry=entry,
                fingerprint=key,
                rom=rom,
                romfile=romfile,
                reason="already_filed",
            )
        log.info("No match")
        return NoMatchResolution(entry=entry, fingerprint=key, reason="no_exact_match")

    def _candidate(self, rom: Rom) -> RomCandidate:
        return RomCandidate(rom=rom, game=self._game(rom))

    def _game(self, rom: Rom) -> Game:
        game = self.games.get(rom.game_id)
        if game is None:
            raise LookupError(f"Rom {rom.name!r} references unknown game {rom.game_id}")
        return game
