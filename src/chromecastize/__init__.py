"""Chromecastize - check and convert videos into Chromecast-playable files."""

from __future__ import annotations

__version__ = "0.1.0"
__description__ = "Check and convert video files for Chromecast playback"

# Public API exports
from .config import ChromecastizeConfig, get_config
from .core import (
    CapabilityRegistry,
    Category,
    ConfigurationGap,
    ConversionFailure,
    FFmpegError,
    FFmpegProcessor,
    FileDecision,
    MediaInfoProbe,
    ProbeResult,
    ProcessedFileLedger,
    ProcessingError,
    ProcessingResult,
    ProcessingStatus,
    ToolUnavailable,
    Verdict,
    decide,
    walk_arguments,
)
from .processors import ChromecastProcessor

__all__ = [
    # Configuration
    "ChromecastizeConfig",
    "get_config",
    # Core functionality
    "CapabilityRegistry",
    "MediaInfoProbe",
    "FFmpegProcessor",
    "ProcessedFileLedger",
    "decide",
    "walk_arguments",
    # Processors
    "ChromecastProcessor",
    # Enums and data classes
    "Category",
    "Verdict",
    "FileDecision",
    "ProbeResult",
    "ProcessingStatus",
    "ProcessingResult",
    # Exceptions
    "ProcessingError",
    "ConfigurationGap",
    "ToolUnavailable",
    "ConversionFailure",
    "FFmpegError",
]
