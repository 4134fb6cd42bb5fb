"""Reconciliation of files on disk with the catalog."""

from __future__ import annotations

from .check import SystemChecker, approve_moves, decline_moves
from .context import ReconciliationContext
from .contracts import (
    AlreadyFiledResolution,
    AmbiguousResolution,
    CheckReport,
    Confirmation,
    Disambiguator,
    EntryResolution,
    ImportOutcome,
    ImportReport,
    ImportStatus,
    MatchedResolution,
    NoMatchResolution,
    PendingMove,
    ResolutionStatus,
    RomCandidate,
    Verification,
    VerificationStatus,
)
from .engine import JB_FOLDER_MARKER, ReconciliationEngine, expand_inputs, is_jb_folder
from .errors import DecodeError, ReconciliationError, TrackLayoutError
from .relocate import QuarantineMover
from .resolve import MatchResolver, decline_candidates, first_candidate

__all__ = [
    "JB_FOLDER_MARKER",
    "AlreadyFiledResolution",
    "AmbiguousResolution",
    "CheckReport",
    "Confirmation",
    "DecodeError",
    "Disambiguator",
    "EntryResolution",
    "ImportOutcome",
    "ImportReport",
    "ImportStatus",
    "MatchResolver",
    "MatchedResolution",
    "NoMatchResolution",
    "PendingMove",
    "QuarantineMover",
    "ReconciliationContext",
    "ReconciliationEngine",
    "ReconciliationError",
    "ResolutionStatus",
    "RomCandidate",
    "SystemChecker",
    "TrackLayoutError",
    "Verification",
    "VerificationStatus",
    "approve_moves",
    "decline_candidates",
    "decline_moves",
    "expand_inputs",
    "first_candidate",
    "is_jb_folder",
]
