"""Capability registry: which containers and codecs a Chromecast plays."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from .base import ConfigurationGap

if TYPE_CHECKING:
    from pathlib import Path

    from ..config.settings import CategoryTable, RegistryConfig

LOG = logging.getLogger(__name__)


class Category(Enum):
    """Registry categories."""

    CONTAINER = "container format"
    VIDEO_CODEC = "video codec"
    AUDIO_CODEC = "audio codec"


class Verdict(Enum):
    """Classification of a single label."""

    SUPPORTED = "supported"
    UNSUPPORTED = "unsupported"
    UNKNOWN = "unknown"


class CapabilityRegistry:
    """Supported/unsupported label tables per category."""

    def __init__(self, tables: dict[Category, tuple[frozenset[str], frozenset[str]]]) -> None:
        self._tables = tables

    @classmethod
    def from_config(cls, registry_config: RegistryConfig) -> CapabilityRegistry:
        """Build the registry from the (seeded and extended) config tables."""

        def _freeze(table: CategoryTable) -> tuple[frozenset[str], frozenset[str]]:
            return frozenset(table.supported), frozenset(table.unsupported)

        return cls(
            {
                Category.CONTAINER: _freeze(registry_config.container),
                Category.VIDEO_CODEC: _freeze(registry_config.video_codec),
                Category.AUDIO_CODEC: _freeze(registry_config.audio_codec),
            }
        )

    def lookup(self, category: Category, label: str) -> Verdict:
        """Return the verdict for a label; labels are compared case-sensitively."""
        supported, unsupported = self._tables[category]
        if label in supported:
            return Verdict.SUPPORTED
        if label in unsupported:
            return Verdict.UNSUPPORTED
        return Verdict.UNKNOWN

    def classify(self, category: Category, label: str, file_path: Path | None = None) -> Verdict:
        """Like lookup(), but an unknown label raises ConfigurationGap."""
        verdict = self.lookup(category, label)
        if verdict is Verdict.UNKNOWN:
            LOG.debug("Unknown %s %r%s", category.value, label, f" in {file_path}" if file_path else "")
            raise ConfigurationGap(category.value, label, file_path=file_path)
        return verdict

    def is_supported(self, category: Category, label: str, file_path: Path | None = None) -> bool:
        """Return True for supported labels, False for unsupported ones."""
        return self.classify(category, label, file_path) is Verdict.SUPPORTED
