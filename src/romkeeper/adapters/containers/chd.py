"""MAME CHD disc images decoded with ``chdman``."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, ClassVar, Final

from romkeeper.domain.model import ContainerEntry, ContainerKind
from romkeeper.domain.reconciliation.errors import DecodeError, TrackLayoutError

from .process import run_tool

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)

CHDMAN_TOOL: Final[str] = "chdman"
TRACKS_DIRECTORY: Final[str] = "tracks"
COPY_CHUNK_SIZE: Final[int] = 1024 * 1024


def split_tracks(
    image: Path,
    tracks: Sequence[tuple[str, int]],
    scratch: Path,
    *,
    source: Path,
) -> list[Path]:
    """Cut a raw disc image into consecutive tracks of the declared sizes.

    The declared sizes must add up to the image length exactly; anything else is
    a layout mismatch for ``source``.
    """

    expected = sum(size for _name, size in tracks)
    actual = image.stat().st_size
    if not tracks or expected != actual:
        raise TrackLayoutError(
            source,
            [],
            f"decoded image is {actual} bytes, {len(tracks)} tracks declare {expected}",
        )

    directory = scratch / TRACKS_DIRECTORY
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    with image.open("rb") as stream:
        for name, size in tracks:
            target = directory / PurePath(name).name
            with target.open("wb") as output:
                remaining = size
                while remaining:
                    chunk = stream.read(min(COPY_CHUNK_SIZE, remaining))
                    if not chunk:
                        raise TrackLayoutError(source, [], f"image ended inside {name}")
                    output.write(chunk)
                    remaining -= len(chunk)
            written.append(target)
    return written


class ChdAdapter:
    """CD images stored as CHD; multi-track discs come with a cue sheet alongside."""

    kind: ClassVar[ContainerKind] = ContainerKind.TRACKED_IMAGE
    extensions: ClassVar[frozenset[str]] = frozenset({"chd"})

    def __init__(self, executable: str = CHDMAN_TOOL) -> None:
        self.executable = executable

    def list_entries(self, path: Path) -> list[ContainerEntry]:
        return [ContainerEntry(name=f"{path.stem}.bin", size=path.stat().st_size)]

    def materialize(
        self,
        path: Path,
        entries: Sequence[ContainerEntry],
        scratch: Path,
    ) -> list[Path]:
        if not entries:
            return []
        if len(entries) != 1:
            raise DecodeError(path, [], f"{len(entries)} entries requested from a single image")
        image = self._extract(path, scratch)
        target = scratch / entries[0].name
        if target != image:
            shutil.move(image, target)
        return [target]

    def decode_tracks(
        self,
        path: Path,
        tracks: Sequence[tuple[str, int]],
        scratch: Path,
    ) -> list[Path]:
        image = self._extract(path, scratch)
        return split_tracks(image, tracks, scratch, source=path)

    def _extract(self, path: Path, scratch: Path) -> Path:
        cue = scratch / f"{path.stem}.cue"
        image = scratch / f"{path.stem}.bin"
        command = [
            self.executable,
            "extractcd",
            "-i",
            str(path),
            "-o",
            str(cue),
            "-ob",
            str(image),
        ]
        log.info('Decoding "%s"', path.name)
        run_tool(command, path=path)
        if not image.is_file():
            raise DecodeError(path, command, f"{image.name} was not written")
        return image
