"""Extension to adapter lookup, populated from the tools installed on this machine."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from romkeeper.domain.reconciliation.placement import extension_of

from .chd import CHDMAN_TOOL, ChdAdapter
from .cso import MAXCSO_TOOL, CsoAdapter
from .plain import PlainFileAdapter
from .rvz import DOLPHIN_TOOL, RvzAdapter
from .sevenzip import SEVEN_ZIP_TOOL, SevenZipAdapter

if TYPE_CHECKING:
    from pathlib import Path

    from romkeeper.domain.ports import ContainerAdapter

log = logging.getLogger(__name__)

type ToolAdapter = type[SevenZipAdapter | ChdAdapter | CsoAdapter | RvzAdapter]

TOOL_ADAPTERS: tuple[tuple[str, ToolAdapter], ...] = (
    (SEVEN_ZIP_TOOL, SevenZipAdapter),
    (CHDMAN_TOOL, ChdAdapter),
    (MAXCSO_TOOL, CsoAdapter),
    (DOLPHIN_TOOL, RvzAdapter),
)


@dataclass(slots=True)
class ContainerRegistry:
    """Pick the adapter for a path by its lowercase extension.

    Unknown extensions fall back to plain files. Extensions whose tool is missing
    resolve to no adapter at all, so callers skip them instead of filing the
    compressed bytes as if they were the rom.
    """

    adapters: dict[str, ContainerAdapter] = field(default_factory=dict)
    missing_tools: dict[str, str] = field(default_factory=dict)
    fallback: ContainerAdapter = field(default_factory=PlainFileAdapter)

    def register(self, adapter: ContainerAdapter) -> None:
        for extension in adapter.extensions:
            self.adapters[extension] = adapter
            self.missing_tools.pop(extension, None)

    def mark_missing(self, tool: str, extensions: frozenset[str]) -> None:
        for extension in extensions:
            self.adapters.pop(extension, None)
            self.missing_tools[extension] = tool

    def adapter_for(self, path: Path) -> ContainerAdapter | None:
        extension = extension_of(path)
        if extension in self.missing_tools:
            return None
        return self.adapters.get(extension, self.fallback)

    def missing_tool_for(self, path: Path) -> str | None:
        return self.missing_tools.get(extension_of(path))


def detect_container_registry(
    which: Callable[[str], str | None] = shutil.which,
) -> ContainerRegistry:
    registry = ContainerRegistry()
    for tool, adapter_type in TOOL_ADAPTERS:
        executable = which(tool)
        if executable is None:
            log.warning(
                '"%s" not found on PATH; %s files will be skipped',
                tool,
                ", ".join(sorted(adapter_type.extensions)),
            )
            registry.mark_missing(tool, adapter_type.extensions)
            continue
        log.debug('Using "%s" for %s', executable, ", ".join(sorted(adapter_type.extensions)))
        registry.register(adapter_type(executable))
    return registry
