"""Data models for Day One import runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from ..core.model import Heading

ConflictPolicy = Literal["skip", "replace"]
CONFLICT_POLICIES: tuple[str, ...] = ("skip", "replace")


@dataclass
class ImportContext:
    """Transient state threaded through one import run."""

    is_new: bool = False  # document created for this run; no UUID can exist yet
    on_conflict: str = "skip"
    root: Heading | None = None  # datetree anchor; None means top level
    photo_dir: Path | None = None
    imported: int = 0
    skipped: list[str] = field(default_factory=list)
    replaced: list[str] = field(default_factory=list)


@dataclass
class ImportResult:
    """Completion report for one import run."""

    source: str  # CSV file the entries came from
    imported: int = 0
    skipped: list[str] = field(default_factory=list)  # UUIDs left alone under "skip"
    replaced: list[str] = field(default_factory=list)  # UUIDs re-imported under "replace"
    document: str | None = None  # target document path, None for a new unsaved buffer
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
