"""Append-only collector for advisory feed diagnostics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)


class DiagnosticCode(str, Enum):
    """Conditions known to cause directory rejection or player problems."""

    DUPLICATE_GUID = "duplicate_guid"
    MISSING_ARTWORK = "missing_artwork"
    MISSING_CATEGORIES = "missing_categories"
    MISSING_DURATION = "missing_duration"
    MISSING_MEDIA_URL = "missing_media_url"
    INVALID_MEDIA_URL = "invalid_media_url"
    MISSING_FILE_SIZE = "missing_file_size"


@dataclass(frozen=True)
class Diagnostic:
    """A single human-readable finding about the input feed.

    Attributes:
        code: Which check produced the finding.
        message: Human-readable message (wording is not a stable contract).
        episode_number: Episode number (explicit or derived) for episode-level findings.
        episode_title: Episode title for episode-level findings.
        value: The offending value, if any (URL, file size, duplicated GUIDs).
    """

    code: DiagnosticCode
    message: str
    episode_number: Optional[str] = None
    episode_title: Optional[str] = None
    value: Any = None

    def __str__(self) -> str:
        return self.message


@dataclass
class Diagnostics:
    """Collects diagnostics produced while generating one or more feeds.

    Entries are only ever appended; reuse one instance across several
    ``generate`` calls to accumulate, or pass a fresh one per call to keep
    the findings of each call separate. Every added entry is also logged at
    WARNING level.
    """

    entries: List[Diagnostic] = field(default_factory=list)

    def add(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic and log it."""
        self.entries.append(diagnostic)
        logger.warning(diagnostic.message)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.add(diagnostic)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def messages(self) -> List[str]:
        return [d.message for d in self.entries]

    def count(self, code: DiagnosticCode) -> int:
        return sum(1 for d in self.entries if d.code == code)

    def by_code(self) -> Dict[DiagnosticCode, List[Diagnostic]]:
        """Group collected diagnostics by code, in first-seen order."""
        grouped: Dict[DiagnosticCode, List[Diagnostic]] = {}
        for diagnostic in self.entries:
            grouped.setdefault(diagnostic.code, []).append(diagnostic)
        return grouped

    def summary(self) -> str:
        """One-line summary, e.g. "3 warning(s): missing_duration x2, missing_artwork x1"."""
        if not self.entries:
            return "No warnings"
        parts = [f"{code.value} x{len(items)}" for code, items in self.by_code().items()]
        return f"{len(self.entries)} warning(s): " + ", ".join(parts)
