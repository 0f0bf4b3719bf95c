"""Base classes and interfaces for media processing."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

LOG = logging.getLogger(__name__)


class ProcessingStatus(Enum):
    """Status of a processing operation."""

    COMPATIBLE = "compatible"
    CONVERTED = "converted"
    NEEDS_CONVERSION = "needs_conversion"
    SKIPPED = "skipped"
    FAILED = "failed"
    ERROR = "error"


class SkipReason(Enum):
    """Why a file was not classified."""

    NOT_VIDEO = "not a video format"
    ALREADY_PROCESSED = "already processed"
    NOT_FOUND = "file not found"
    INVALID = "invalid file"


@dataclass
class ProcessingResult:
    """Result of a media processing operation."""

    source_file: Path
    status: ProcessingStatus
    message: str = ""
    output_file: Path | None = None
    skip_reason: SkipReason | None = None
    processing_time: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)


class ProcessingError(Exception):
    """Base exception for media processing errors."""

    def __init__(
        self,
        message: str,
        file_path: Path | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.file_path = file_path
        self.cause = cause


class ConfigurationGap(ProcessingError):
    """A probed label is in neither capability table; the run must stop."""

    def __init__(self, category: str, label: str, file_path: Path | None = None) -> None:
        shown = f"'{label}'" if label else "an empty label"
        message = (
            f"{shown} is an unknown {category}. Please add it to the {category} registry "
            "(supported or unsupported) in config.yaml."
        )
        super().__init__(message, file_path=file_path)
        self.category = category
        self.label = label


class ToolUnavailable(ProcessingError):
    """A required external tool cannot be found."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"`{tool}` is not available, please install it")
        self.tool = tool


class ConversionFailure(ProcessingError):
    """The transcoder did not produce a usable output file."""


class ProbeError(ProcessingError):
    """The inspection tool could not be run against one file."""


class MediaProcessor(ABC):
    """Abstract base class for media processors."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @abstractmethod
    def can_process(self, file_path: Path) -> bool:
        """Check if this processor can handle the given file."""

    @abstractmethod
    def should_process(self, file_path: Path) -> bool:
        """Check if the file should be processed (not already handled)."""

    @abstractmethod
    def process_file(self, file_path: Path, **kwargs: Any) -> ProcessingResult:
        """Process a single file."""
