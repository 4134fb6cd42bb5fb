"""Import flow: list, resolve and place new files, one transaction per input.

Each top-level input goes through::

    listed -> per-entry resolved -> placed | quarantined | skipped

Files moved while handling an input are journaled by the ``QuarantineMover``;
when the input fails, the journal is reverted before the unit of work rolls back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Final, cast

from romkeeper.common.files import disk_size, prune_empty_directories, scratch_directory
from romkeeper.domain.hashing import HashEngine
from romkeeper.domain.model import ContainerEntry, ContainerKind, HashAlgorithm

from .check import SystemChecker, decline_moves
from .context import ReconciliationContext
from .contracts import (
    CheckReport,
    Confirmation,
    Disambiguator,
    ImportOutcome,
    ImportReport,
    ImportStatus,
    MatchedResolution,
    NoMatchResolution,
)
from .errors import DecodeError, TrackLayoutError
from .placement import (
    archive_destination,
    extension_of,
    image_destination,
    rom_destination,
    with_extension,
)
from .resolve import first_candidate

if TYPE_CHECKING:
    from romkeeper.config import LibraryConfig
    from romkeeper.domain.model import Rom
    from romkeeper.domain.ports import (
        ArchiveAdapter,
        CatalogUnitOfWork,
        ContainerAdapter,
        ContainerLookup,
        TrackedImageAdapter,
    )

    from .contracts import EntryResolution

log = logging.getLogger(__name__)

JB_FOLDER_MARKER: Final[str] = "PS3_DISC.SFB"
CUE_EXTENSION: Final[str] = "cue"

type DestinationRule = Callable[[ReconciliationContext, MatchedResolution, Path], Path]


def is_jb_folder(path: Path) -> bool:
    return path.is_dir() and (path / JB_FOLDER_MARKER).is_file()


def expand_inputs(paths: Iterable[Path]) -> list[Path]:
    """Flatten directories into their files (sorted), keeping JB folders whole."""

    expanded: list[Path] = []
    for path in paths:
        if not path.is_dir() or is_jb_folder(path):
            expanded.append(path)
            continue
        children = sorted(path.iterdir())
        expanded.extend(expand_inputs(children))
    return expanded


def _skipped(source: Path, reason: str) -> ImportOutcome:
    return ImportOutcome(source=source, status=ImportStatus.SKIPPED, reason=reason)


def _placed(source: Path, destinations: Sequence[Path]) -> ImportOutcome:
    return ImportOutcome(
        source=source,
        status=ImportStatus.PLACED,
        destinations=tuple(destinations),
    )


def _rom_rule(context: ReconciliationContext, match: MatchedResolution, _source: Path) -> Path:
    return rom_destination(context.system_directory, context.system, match.game, match.rom)


def _image_rule(context: ReconciliationContext, match: MatchedResolution, source: Path) -> Path:
    return image_destination(context.system_directory, match.rom, extension_of(source))


@dataclass(slots=True)
class ReconciliationEngine:
    """Entry point for importing files into, and checking files of, the library."""

    config: LibraryConfig
    unit_of_work_factory: Callable[[], CatalogUnitOfWork]
    containers: ContainerLookup
    disambiguate: Disambiguator = first_candidate
    confirm: Confirmation = decline_moves
    hasher: HashEngine = field(default_factory=HashEngine)

    # ----- import -----

    def import_paths(
        self,
        paths: Iterable[Path],
        *,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> ImportReport:
        report = ImportReport()
        for source in expand_inputs(path.expanduser().resolve() for path in paths):
            log.info('Processing "%s"', source)
            if not source.exists():
                log.info('"%s" no longer exists', source)
                report.add(_skipped(source, "missing_input"))
            elif is_jb_folder(source):
                report.add(self.import_jb_folder(source, system_id=system_id))
            else:
                report.add(self.import_file(source, system_id=system_id, algorithm=algorithm))
        self.update_completion(system_id)
        log.info(
            "Import finished: %d placed, %d quarantined, %d skipped",
            report.count(ImportStatus.PLACED),
            report.count(ImportStatus.QUARANTINED),
            report.count(ImportStatus.SKIPPED),
        )
        return report

    def import_file(
        self,
        source: Path,
        *,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> ImportOutcome:
        with self.unit_of_work_factory() as uow:
            context = self._open(uow, system_id=system_id, algorithm=algorithm)
            if context.catalog.romfiles.get_by_path(str(source)) is not None:
                log.info('"%s" is already in the library', source.name)
                return _skipped(source, "already_registered")
            try:
                outcome = self._import_container(context, source)
                uow.commit()
            except Exception:
                context.mover.revert()
                raise
        return outcome

    def import_jb_folder(self, folder: Path, *, system_id: int) -> ImportOutcome:
        """Import an extracted PS3 disc; JB folders are always matched by MD5."""

        with self.unit_of_work_factory() as uow:
            context = self._open(uow, system_id=system_id, algorithm=HashAlgorithm.MD5)
            if context.catalog.romfiles.get_by_path(str(folder / JB_FOLDER_MARKER)) is not None:
                log.info('"%s" is already in the library', folder.name)
                return _skipped(folder, "already_registered")
            try:
                outcome = self._import_jb_folder(context, folder)
                uow.commit()
            except Exception:
                context.mover.revert()
                raise
        if outcome.status is ImportStatus.PLACED:
            try:
                prune_empty_directories(folder)
            except OSError as exc:
                log.warning('Could not remove leftovers of "%s": %s', folder, exc)
        return outcome

    def update_completion(self, system_id: int) -> None:
        with self.unit_of_work_factory() as uow:
            uow.repositories.games.update_completion(system_id)
            uow.repositories.systems.update_completion(system_id)
            uow.commit()

    # ----- check -----

    def check_system(self, system_id: int, *, algorithm: HashAlgorithm) -> CheckReport:
        with self.unit_of_work_factory() as uow:
            context = self._open(uow, system_id=system_id, algorithm=algorithm)
            checker = SystemChecker(context=context, containers=self.containers)
            report = checker.verify_all()
            if not report.moves:
                log.info('Nothing to do for "%s"', report.system_name)
                return report
            for move in report.moves:
                log.info('"%s" -> "%s"', move.romfile.path, move.destination)
            if not self.confirm(report.moves):
                log.info("Leaving invalid files in place")
                return report
            try:
                checker.apply(report.moves)
                uow.commit()
            except Exception:
                context.mover.revert()
                raise
            report.confirmed = True
        return report

    # ----- per-family import flows -----

    def _open(
        self,
        uow: CatalogUnitOfWork,
        *,
        system_id: int,
        algorithm: HashAlgorithm,
    ) -> ReconciliationContext:
        return ReconciliationContext.open(
            uow.repositories,
            config=self.config,
            system_id=system_id,
            algorithm=algorithm,
            hasher=self.hasher,
            disambiguate=self.disambiguate,
        )

    def _import_container(self, context: ReconciliationContext, source: Path) -> ImportOutcome:
        adapter = self.containers.adapter_for(source)
        if adapter is None:
            tool = self.containers.missing_tool_for(source)
            log.warning('"%s" is not available, skipping "%s"', tool, source.name)
            return _skipped(source, "missing_tool")

        match adapter.kind:
            case ContainerKind.ARCHIVE:
                return self._import_archive(context, source, cast("ArchiveAdapter", adapter))
            case ContainerKind.TRACKED_IMAGE if source.with_suffix(f".{CUE_EXTENSION}").is_file():
                return self._import_tracked_image(
                    context,
                    source,
                    cast("TrackedImageAdapter", adapter),
                )
            case ContainerKind.TRACKED_IMAGE | ContainerKind.IMAGE:
                return self._import_single(context, source, adapter, _image_rule)
            case _:
                return self._import_single(context, source, adapter, _rom_rule)

    def _resolve_all(
        self,
        context: ReconciliationContext,
        source: Path,
        adapter: ContainerAdapter,
    ) -> tuple[list[ContainerEntry], list[EntryResolution]]:
        entries = adapter.list_entries(source)
        resolutions = context.resolver.resolve(
            entries,
            system=context.system,
            header=context.header,
            algorithm=context.algorithm,
            fingerprint=context.entry_fingerprinter(source, adapter),
        )
        return entries, resolutions

    def _quarantine(self, context: ReconciliationContext, source: Path) -> ImportOutcome:
        romfile = context.mover.quarantine(source, context.system)
        return ImportOutcome(
            source=source,
            status=ImportStatus.QUARANTINED,
            destinations=(Path(romfile.path),),
            reason="no_match",
        )

    def _import_single(
        self,
        context: ReconciliationContext,
        source: Path,
        adapter: ContainerAdapter,
        destination_for: DestinationRule,
    ) -> ImportOutcome:
        _entries, resolutions = self._resolve_all(context, source, adapter)
        if len(resolutions) != 1:
            log.warning('Expected one entry in "%s", found %d', source.name, len(resolutions))
            return _skipped(source, "entry_count")

        match resolutions[0]:
            case MatchedResolution() as match:
                destination = destination_for(context, match, source)
                context.mover.place(source, destination, [match.rom])
                return _placed(source, [destination])
            case NoMatchResolution():
                return self._quarantine(context, source)
            case other:
                return _skipped(source, other.status.value)

    def _import_archive(
        self,
        context: ReconciliationContext,
        source: Path,
        adapter: ArchiveAdapter,
    ) -> ImportOutcome:
        entries, resolutions = self._resolve_all(context, source, adapter)
        if not entries:
            log.warning('"%s" is empty', source.name)
            return _skipped(source, "empty_container")
        if len(entries) == 1 and isinstance(resolutions[0], NoMatchResolution):
            return self._quarantine(context, source)

        matched = [item for item in resolutions if isinstance(item, MatchedResolution)]
        if not matched:
            return _skipped(source, resolutions[0].status.value)
        if len(matched) == len(entries) and self._is_whole_game(context, matched):
            return self._repack(context, source, adapter, matched)
        return self._extract_each(context, source, adapter, matched)

    def _is_whole_game(
        self,
        context: ReconciliationContext,
        matched: Sequence[MatchedResolution],
    ) -> bool:
        game_ids = {item.rom.game_id for item in matched}
        if len(game_ids) != 1:
            return False
        expected = {rom.key for rom in context.catalog.roms.find_by_game_no_parents(game_ids.pop())}
        return expected == {item.rom.key for item in matched}

    def _repack(
        self,
        context: ReconciliationContext,
        source: Path,
        adapter: ArchiveAdapter,
        matched: Sequence[MatchedResolution],
    ) -> ImportOutcome:
        roms = [item.rom for item in matched]
        destination = archive_destination(
            context.system_directory,
            context.system,
            matched[0].game,
            roms,
            extension_of(source),
        )
        renamed: list[tuple[str, str]] = []
        try:
            for item in matched:
                if item.entry.name == item.rom.name:
                    continue
                log.info('Renaming "%s" to "%s"', item.entry.name, item.rom.name)
                adapter.rename_entry(source, item.entry.name, item.rom.name)
                renamed.append((item.entry.name, item.rom.name))
            context.mover.place(source, destination, roms)
        except Exception:
            context.mover.revert()
            self._restore_entry_names(source, adapter, renamed)
            raise
        return _placed(source, [destination])

    def _restore_entry_names(
        self,
        source: Path,
        adapter: ArchiveAdapter,
        renamed: Sequence[tuple[str, str]],
    ) -> None:
        for original, current in reversed(renamed):
            try:
                adapter.rename_entry(source, current, original)
            except DecodeError:
                log.exception('Could not restore "%s" in "%s"', original, source.name)

    def _extract_each(
        self,
        context: ReconciliationContext,
        source: Path,
        adapter: ContainerAdapter,
        matched: Sequence[MatchedResolution],
    ) -> ImportOutcome:
        destinations: list[Path] = []
        for item in matched:
            destination = _rom_rule(context, item, source)
            with scratch_directory(self.config.tmp_directory) as scratch:
                (extracted,) = adapter.materialize(source, [item.entry], scratch)
                context.mover.place(extracted, destination, [item.rom])
            destinations.append(destination)
        return _placed(source, destinations)

    def _import_tracked_image(
        self,
        context: ReconciliationContext,
        source: Path,
        adapter: TrackedImageAdapter,
    ) -> ImportOutcome:
        cue = source.with_suffix(f".{CUE_EXTENSION}")
        cue_entry = ContainerEntry(name=cue.name, size=cue.stat().st_size)
        cue_resolution = context.resolver.resolve_fingerprint(
            cue_entry,
            context.fingerprint_file(cue),
            system=context.system,
            algorithm=context.algorithm,
        )
        match cue_resolution:
            case NoMatchResolution():
                return self._quarantine(context, cue)
            case MatchedResolution() as cue_match:
                pass
            case other:
                return _skipped(source, other.status.value)

        tracks = [
            rom
            for rom in context.catalog.roms.find_by_game_no_parents(cue_match.rom.game_id)
            if rom.key != cue_match.rom.key
        ]
        if not self._tracks_match(context, source, adapter, tracks):
            return self._quarantine(context, source)

        cue_destination = context.system_directory / cue_match.rom.name
        image = with_extension(cue_destination, extension_of(source))
        context.mover.place(cue, cue_destination, [cue_match.rom])
        context.mover.place(source, image, tracks)
        return _placed(source, [cue_destination, image])

    def _tracks_match(
        self,
        context: ReconciliationContext,
        source: Path,
        adapter: TrackedImageAdapter,
        tracks: Sequence[Rom],
    ) -> bool:
        with scratch_directory(self.config.tmp_directory) as scratch:
            try:
                decoded = adapter.decode_tracks(
                    source,
                    [(rom.name, rom.size) for rom in tracks],
                    scratch,
                )
            except TrackLayoutError as exc:
                log.info("Track layout mismatch: %s", exc.message)
                return False
            if len(decoded) != len(tracks):
                log.info("Expected %d tracks, decoded %d", len(tracks), len(decoded))
                return False
            for rom, track in zip(tracks, decoded, strict=True):
                algorithm = context.algorithm_for(rom)
                size, digest = context.fingerprint_file(track, algorithm=algorithm)
                if not rom.matches(size, digest, algorithm):
                    log.info('Track "%s" does not match, got %s', rom.name, digest)
                    return False
        return True

    def _import_jb_folder(self, context: ReconciliationContext, folder: Path) -> ImportOutcome:
        marker = folder / JB_FOLDER_MARKER
        key = context.fingerprint_file(marker, header=False)
        marker_resolution = context.resolver.resolve_candidates(
            ContainerEntry(name=JB_FOLDER_MARKER, size=key.size),
            key,
            context.catalog.roms.find_unfiled_by_name_and_hash(
                name=JB_FOLDER_MARKER,
                size=key.size,
                digest=key.digest,
                system_id=context.system.key,
                algorithm=HashAlgorithm.MD5,
            ),
        )
        match marker_resolution:
            case NoMatchResolution():
                return self._quarantine(context, folder)
            case MatchedResolution() as marker_match:
                game = marker_match.game
            case other:
                return _skipped(folder, other.status.value)

        log.info('"%s" is "%s" (%d bytes)', folder.name, game.name, disk_size(folder))
        claimed: set[int] = set()
        destinations: list[Path] = []
        game_roms = context.catalog.roms.find_by_game_no_parents(game.key)
        for file in sorted(path for path in folder.rglob("*") if path.is_file()):
            relative = file.relative_to(folder).as_posix()
            key = context.fingerprint_file(file, header=False)
            candidates = [
                rom
                for rom in game_roms
                if not rom.filed
                and rom.key not in claimed
                and rom.matches(key.size, key.digest, HashAlgorithm.MD5)
            ]
            resolution = context.resolver.resolve_candidates(
                ContainerEntry(name=relative, size=key.size),
                key,
                candidates,
            )
            if not isinstance(resolution, MatchedResolution):
                continue
            claimed.add(resolution.rom.key)
            destination = context.system_directory / game.name / resolution.rom.name
            context.mover.place(file, destination, [resolution.rom])
            destinations.append(destination)

        if not destinations:
            return _skipped(folder, "no_match")
        return _placed(folder, destinations)
