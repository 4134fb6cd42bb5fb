"""Errors that abort the current top-level input."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class ReconciliationError(RuntimeError):
    """Base class for fatal reconciliation failures."""


class DecodeError(ReconciliationError):
    """An external container tool failed or produced output we cannot use."""

    def __init__(self, path: Path, command: Sequence[str], message: str) -> None:
        self.path = path
        self.command = tuple(command)
        self.message = message.strip()
        if self.command:
            super().__init__(f"{path}: {' '.join(self.command)} failed: {self.message}")
        else:
            super().__init__(f"{path}: {self.message}")


class TrackLayoutError(DecodeError):
    """Decoded image does not split into the expected tracks."""
