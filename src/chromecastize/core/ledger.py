"""Persistent record of files that are already Chromecast-ready."""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG = logging.getLogger(__name__)


def canonical_path(file_path: Path) -> Path:
    """Absolute, normalized form used for every ledger lookup and append."""
    return Path(os.path.realpath(file_path))


class ProcessedFileLedger:
    """
    Append-only list of absolute paths, one per line.

    A path in the ledger was either validated as playable or produced by a
    conversion. Entries are never rewritten or deduplicated; the file is
    loaded into a set once so lookups stay O(1), and the set is kept in step
    with every append.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._entries: set[str] | None = None

    def ensure_exists(self) -> None:
        """Create the backing file (and its directory) with an empty body if missing."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self.path.touch()
            LOG.debug("Created ledger: %s", self.path)

    def _load(self) -> set[str]:
        if self._entries is None:
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    self._entries = {line.rstrip("\n") for line in f if line.strip()}
            except FileNotFoundError:
                self._entries = set()
            LOG.debug("Loaded %d ledger entries from %s", len(self._entries), self.path)
        return self._entries

    def contains(self, file_path: Path) -> bool:
        """Exact-match membership test on the canonical path."""
        return str(canonical_path(file_path)) in self._load()

    def record(self, file_path: Path) -> None:
        """Append the canonical path; duplicates are written as-is."""
        entry = str(canonical_path(file_path))
        self.ensure_exists()
        with self.path.open("a", encoding="utf-8") as f:
            f.write(entry + "\n")
        self._load().add(entry)
        LOG.debug("Recorded in ledger: %s", entry)

    def __contains__(self, file_path: object) -> bool:
        return isinstance(file_path, (str, Path)) and self.contains(Path(file_path))

    def __len__(self) -> int:
        return len(self._load())
