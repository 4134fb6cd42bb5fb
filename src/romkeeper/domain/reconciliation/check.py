"""Check flow: re-hash every filed romfile of a system against the roms it backs."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, cast

from romkeeper.common.files import scratch_directory
from romkeeper.domain.model import ContainerKind

from .contracts import CheckReport, PendingMove, Verification, VerificationStatus
from .errors import TrackLayoutError
from .resolve import can_use_listing_crc

if TYPE_CHECKING:
    from collections.abc import Sequence

    from romkeeper.domain.model import ContainerEntry, Rom, Romfile
    from romkeeper.domain.ports import ContainerAdapter, ContainerLookup, TrackedImageAdapter

    from .context import ReconciliationContext

log = logging.getLogger(__name__)


def decline_moves(_moves: Sequence[PendingMove]) -> bool:
    return False


def approve_moves(_moves: Sequence[PendingMove]) -> bool:
    return True


def _invalid(romfile: Romfile, reason: str) -> Verification:
    log.info('"%s" is invalid (%s)', romfile.path, reason)
    return Verification(romfile=romfile, status=VerificationStatus.INVALID, reason=reason)


def _valid(romfile: Romfile) -> Verification:
    return Verification(romfile=romfile, status=VerificationStatus.VALID)


@dataclass(slots=True, kw_only=True)
class SystemChecker:
    """Verify one system inside an open unit of work and collect pending trash moves."""

    context: ReconciliationContext
    containers: ContainerLookup

    def verify_all(self) -> CheckReport:
        context = self.context
        report = CheckReport(system_name=context.system.name)
        backing: defaultdict[int, list[Rom]] = defaultdict(list)
        for rom in context.catalog.roms.find_filed_by_system(context.system.key):
            if rom.romfile_id is not None:
                backing[rom.romfile_id].append(rom)

        trash = context.trash_directory
        claimed: set[Path] = set()
        for romfile in context.catalog.romfiles.find_by_system(context.system.key):
            path = Path(romfile.path)
            if path.is_relative_to(trash):
                continue
            roms = sorted(backing.get(romfile.key, []), key=lambda rom: rom.key)
            log.info('Checking "%s"', romfile.file_name)
            verification = self.verify(romfile, roms)
            report.verifications.append(verification)
            if verification.status is VerificationStatus.INVALID:
                destination = context.mover.trash_destination(path, context.system, claimed)
                claimed.add(destination)
                report.moves.append(PendingMove(romfile=romfile, destination=destination))

        log.info(
            '"%s": %d valid, %d invalid, %d missing',
            report.system_name,
            report.count(VerificationStatus.VALID),
            report.count(VerificationStatus.INVALID),
            report.count(VerificationStatus.MISSING),
        )
        return report

    def apply(self, moves: Sequence[PendingMove]) -> None:
        for move in moves:
            self.context.mover.relocate(move.romfile, move.destination)

    def verify(self, romfile: Romfile, roms: Sequence[Rom]) -> Verification:
        path = Path(romfile.path)
        if not path.exists():
            log.warning('"%s" is missing', romfile.path)
            return Verification(romfile=romfile, status=VerificationStatus.MISSING)
        if not roms:
            return _invalid(romfile, "no_roms")

        adapter = self.containers.adapter_for(path)
        if adapter is None:
            tool = self.containers.missing_tool_for(path)
            log.warning('"%s" is not available, cannot check "%s"', tool, path.name)
            return Verification(
                romfile=romfile,
                status=VerificationStatus.UNCHECKED,
                reason="missing_tool",
            )

        match adapter.kind:
            case ContainerKind.ARCHIVE:
                return self._verify_entries(romfile, path, adapter, roms)
            case ContainerKind.TRACKED_IMAGE if len(roms) > 1:
                return self._verify_tracks(
                    romfile,
                    path,
                    cast("TrackedImageAdapter", adapter),
                    roms,
                )
            case _:
                return self._verify_single(romfile, path, adapter, roms)

    def _fingerprint_matches(
        self,
        path: Path,
        adapter: ContainerAdapter,
        entry: ContainerEntry,
        rom: Rom,
    ) -> bool:
        algorithm = self.context.algorithm_for(rom)
        if can_use_listing_crc(entry, header=self.context.header, algorithm=algorithm):
            return rom.matches(entry.size, (entry.crc or "").lower(), algorithm)
        size, digest = self.context.fingerprint_entry(path, adapter, entry, algorithm=algorithm)
        return rom.matches(size, digest, algorithm)

    def _verify_single(
        self,
        romfile: Romfile,
        path: Path,
        adapter: ContainerAdapter,
        roms: Sequence[Rom],
    ) -> Verification:
        entries = adapter.list_entries(path)
        if len(entries) != 1 or len(roms) != 1:
            return _invalid(romfile, "entry_count")
        if not self._fingerprint_matches(path, adapter, entries[0], roms[0]):
            return _invalid(romfile, "digest_mismatch")
        return _valid(romfile)

    def _verify_entries(
        self,
        romfile: Romfile,
        path: Path,
        adapter: ContainerAdapter,
        roms: Sequence[Rom],
    ) -> Verification:
        entries = adapter.list_entries(path)
        if len(entries) != len(roms):
            return _invalid(romfile, "entry_count")
        by_name = {rom.name: rom for rom in roms}
        for entry in entries:
            rom = by_name.get(entry.name)
            if rom is None:
                return _invalid(romfile, "unknown_entry")
            if not self._fingerprint_matches(path, adapter, entry, rom):
                return _invalid(romfile, "digest_mismatch")
        return _valid(romfile)

    def _verify_tracks(
        self,
        romfile: Romfile,
        path: Path,
        adapter: TrackedImageAdapter,
        roms: Sequence[Rom],
    ) -> Verification:
        context = self.context
        with scratch_directory(context.config.tmp_directory) as scratch:
            try:
                tracks = adapter.decode_tracks(path, [(rom.name, rom.size) for rom in roms], scratch)
            except TrackLayoutError as exc:
                log.info("Track layout mismatch: %s", exc.message)
                return _invalid(romfile, "track_layout")
            if len(tracks) != len(roms):
                return _invalid(romfile, "track_layout")
            for rom, track in zip(roms, tracks, strict=True):
                algorithm = context.algorithm_for(rom)
                size, digest = context.fingerprint_file(track, algorithm=algorithm)
                if not rom.matches(size, digest, algorithm):
                    return _invalid(romfile, "digest_mismatch")
        return _valid(romfile)
