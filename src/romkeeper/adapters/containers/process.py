"""Running external container tools."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from romkeeper.domain.reconciliation.errors import DecodeError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

log = logging.getLogger(__name__)


def run_tool(command: Sequence[str], *, path: Path) -> str:
    """Run ``command`` for the container at ``path`` and return its standard output.

    A missing executable or a non-zero exit status raises ``DecodeError`` carrying
    the tool's own error output.
    """

    log.debug("Running %s", " ".join(command))
    try:
        completed = subprocess.run(  # noqa: S603
            list(command),
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
    except FileNotFoundError as exc:
        raise DecodeError(path, command, f"{command[0]} not found") from exc
    if completed.returncode != 0:
        message = completed.stderr.strip() or completed.stdout.strip()
        raise DecodeError(path, command, message or f"exit status {completed.returncode}")
    return completed.stdout
