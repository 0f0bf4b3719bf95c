"""Core abstractions and utilities for chromecastize."""

from .base import (
    ConfigurationGap,
    ConversionFailure,
    MediaProcessor,
    ProbeError,
    ProcessingError,
    ProcessingResult,
    ProcessingStatus,
    SkipReason,
    ToolUnavailable,
)
from .classifier import FileDecision, decide, precheck
from .ffmpeg import FFmpegError, FFmpegProcessor
from .file_manager import FileManager
from .ledger import ProcessedFileLedger
from .mediainfo import MediaInfoProbe, ProbeResult
from .registry import CapabilityRegistry, Category, Verdict
from .walker import ProcessingUnit, walk_arguments

__all__ = [
    "CapabilityRegistry",
    "Category",
    "ConfigurationGap",
    "ConversionFailure",
    "FFmpegError",
    "FFmpegProcessor",
    "FileDecision",
    "FileManager",
    "MediaInfoProbe",
    "MediaProcessor",
    "ProbeError",
    "ProbeResult",
    "ProcessedFileLedger",
    "ProcessingError",
    "ProcessingResult",
    "ProcessingStatus",
    "ProcessingUnit",
    "SkipReason",
    "ToolUnavailable",
    "Verdict",
    "decide",
    "precheck",
    "walk_arguments",
]
