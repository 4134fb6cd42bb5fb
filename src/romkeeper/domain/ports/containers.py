"""Container capability ports.

Every family exposes the same two operations: list what is inside, and put
selected entries on disk as plain files. Decoding itself is delegated to external
tools by the adapters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from romkeeper.domain.model import ContainerEntry, ContainerKind


@runtime_checkable
class ContainerAdapter(Protocol):
    kind: ClassVar[ContainerKind]
    extensions: ClassVar[frozenset[str]]

    def list_entries(self, path: Path) -> list[ContainerEntry]: ...

    def materialize(
        self,
        path: Path,
        entries: Sequence[ContainerEntry],
        scratch: Path,
    ) -> list[Path]:
        """Return one plain file per entry, in the order given.

        Files written by the adapter live under ``scratch``; the caller owns its cleanup.
        """
        ...


@runtime_checkable
class ArchiveAdapter(ContainerAdapter, Protocol):
    """Multi-entry archive that can also rename its members in place."""

    def rename_entry(self, path: Path, old_name: str, new_name: str) -> None: ...


@runtime_checkable
class TrackedImageAdapter(ContainerAdapter, Protocol):
    """Disk image whose tracks are described by a companion cue sheet."""

    def decode_tracks(
        self,
        path: Path,
        tracks: Sequence[tuple[str, int]],
        scratch: Path,
    ) -> list[Path]:
        """Emit exactly one file per ``(name, size)`` pair or raise ``TrackLayoutError``."""
        ...


class ContainerLookup(Protocol):
    """Resolve the adapter responsible for a path, if one is available."""

    def adapter_for(self, path: Path) -> ContainerAdapter | None: ...

    def missing_tool_for(self, path: Path) -> str | None: ...
