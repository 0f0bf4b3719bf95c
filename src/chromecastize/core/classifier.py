"""Per-file decision: which container and codecs a Chromecast-ready copy needs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..config.constants import PASSTHROUGH_CODEC, PASSTHROUGH_CONTAINER
from .base import SkipReason
from .registry import Category

if TYPE_CHECKING:
    from collections.abc import Collection
    from pathlib import Path

    from ..config.settings import ConversionDefaults
    from .ledger import ProcessedFileLedger
    from .mediainfo import ProbeResult
    from .registry import CapabilityRegistry

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileDecision:
    """Input labels and the outputs chosen for them."""

    input_container: str
    output_container: str
    input_video_codec: str
    output_video_codec: str
    input_audio_codec: str
    output_audio_codec: str

    @property
    def is_compatible(self) -> bool:
        """True when every stream and the container can be kept as they are."""
        return (
            self.output_video_codec == PASSTHROUGH_CODEC
            and self.output_audio_codec == PASSTHROUGH_CODEC
            and self.output_container == PASSTHROUGH_CONTAINER
        )


def file_extension(file_path: Path) -> str:
    """Text after the last dot of the file name (the whole name if there is none)."""
    return file_path.name.rsplit(".", 1)[-1]


def precheck(
    file_path: Path,
    extensions: Collection[str],
    ledger: ProcessedFileLedger,
) -> SkipReason | None:
    """Steps that need no probe: extension filter, then ledger lookup."""
    if file_extension(file_path).lower() not in extensions:
        return SkipReason.NOT_VIDEO
    if ledger.contains(file_path):
        return SkipReason.ALREADY_PROCESSED
    return None


def decide(  # noqa: PLR0913
    file_path: Path,
    extension: str,
    probe_result: ProbeResult,
    override: str | None,
    registry: CapabilityRegistry,
    defaults: ConversionDefaults,
) -> FileDecision:
    """
    Choose output container and codecs for one probed file.

    Args:
        file_path: File being classified (used for error context only)
        extension: The file's current extension, original case
        probe_result: Labels reported by the inspection tool
        override: Forced output container ("mp4"/"mkv") or None
        registry: Capability tables
        defaults: Encoders and container used when a change is needed

    Returns:
        The decision. When a conversion is needed the container is always
        concrete; the "ok" sentinel only survives for compatible files.

    Raises:
        ConfigurationGap: a label is in neither table of its category

    """
    container_supported = registry.is_supported(Category.CONTAINER, probe_result.container, file_path)
    override_matches = override is not None and override == extension
    if (container_supported and override is None) or override_matches:
        output_container = PASSTHROUGH_CONTAINER
    else:
        output_container = override or defaults.container
    LOG.info("- general: %s -> %s", probe_result.container, output_container)

    if registry.is_supported(Category.VIDEO_CODEC, probe_result.video_codec, file_path):
        output_video = PASSTHROUGH_CODEC
    else:
        output_video = defaults.video_codec
    LOG.info("- video: %s -> %s", probe_result.video_codec, output_video)

    if registry.is_supported(Category.AUDIO_CODEC, probe_result.audio_codec, file_path):
        output_audio = PASSTHROUGH_CODEC
    else:
        output_audio = defaults.audio_codec
    LOG.info("- audio: %s -> %s", probe_result.audio_codec, output_audio)

    decision = FileDecision(
        input_container=probe_result.container,
        output_container=output_container,
        input_video_codec=probe_result.video_codec,
        output_video_codec=output_video,
        input_audio_codec=probe_result.audio_codec,
        output_audio_codec=output_audio,
    )
    if not decision.is_compatible and decision.output_container == PASSTHROUGH_CONTAINER:
        # A conversion happens anyway, so keep the current container explicitly
        decision = replace(decision, output_container=extension)
    return decision
