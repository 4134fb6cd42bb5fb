"""Uncompressed files: the file is its own single entry."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from romkeeper.domain.model import ContainerEntry, ContainerKind

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class PlainFileAdapter:
    kind: ClassVar[ContainerKind] = ContainerKind.PLAIN
    extensions: ClassVar[frozenset[str]] = frozenset()

    def list_entries(self, path: Path) -> list[ContainerEntry]:
        return [ContainerEntry(name=path.name, size=path.stat().st_size)]

    def materialize(
        self,
        path: Path,
        entries: Sequence[ContainerEntry],
        scratch: Path,
    ) -> list[Path]:
        return [path for _entry in entries]
