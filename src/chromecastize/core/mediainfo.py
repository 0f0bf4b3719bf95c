"""MediaInfo integration: container and codec labels for one file."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..config.constants import PROBE_TIMEOUT_SECONDS
from .base import ProbeError, ToolUnavailable

if TYPE_CHECKING:
    from pathlib import Path

LOG = logging.getLogger(__name__)

MEDIAINFO = "mediainfo"

CONTAINER_QUERY = "General;%Format%\\n"
VIDEO_CODEC_QUERY = "Video;%Format%\\n"
AUDIO_CODEC_QUERY = "Audio;%Format%\\n"
DURATION_QUERY = "General;%Duration%"


@dataclass(frozen=True)
class ProbeResult:
    """Labels reported by the inspection tool; empty strings when absent."""

    container: str
    video_codec: str
    audio_codec: str
    duration: str = ""


def format_duration(duration_ms: str) -> str:
    """Render a millisecond duration as HH:MM:SS.mmm, or '' if unparseable."""
    try:
        total_ms = int(float(duration_ms))
    except ValueError:
        return ""
    seconds, millis = divmod(total_ms, 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


class MediaInfoProbe:
    """Thin wrapper around the `mediainfo` command line tool."""

    def __init__(self, timeout: int = PROBE_TIMEOUT_SECONDS) -> None:
        self.timeout = timeout

    @staticmethod
    def check_availability() -> None:
        """Fail fast if mediainfo is not installed."""
        if not shutil.which(MEDIAINFO):
            LOG.error("Missing executable: %s", MEDIAINFO)
            raise ToolUnavailable(MEDIAINFO)

    def query(self, file_path: Path, inform: str) -> str:
        """Run one --Inform query and return the first line of its output."""
        cmd = [MEDIAINFO, f"--Inform={inform}", str(file_path)]
        LOG.debug("Running: %s", " ".join(cmd))

        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.TimeoutExpired as e:
            msg = f"mediainfo timed out for {file_path}"
            raise ProbeError(msg, file_path=file_path, cause=e) from e
        except OSError as e:
            msg = f"Could not run mediainfo for {file_path}: {e}"
            raise ProbeError(msg, file_path=file_path, cause=e) from e

        if result.returncode != 0:
            LOG.debug("mediainfo exited with %d for %s: %s", result.returncode, file_path, result.stderr.strip())

        lines = result.stdout.splitlines()
        return lines[0].strip() if lines else ""

    def probe(self, file_path: Path) -> ProbeResult:
        """Read container format, video codec and audio codec labels."""
        return ProbeResult(
            container=self.query(file_path, CONTAINER_QUERY),
            video_codec=self.query(file_path, VIDEO_CODEC_QUERY),
            audio_codec=self.query(file_path, AUDIO_CODEC_QUERY),
        )

    def get_duration(self, file_path: Path) -> str:
        """Duration in milliseconds as reported by mediainfo, '' if unknown."""
        return self.query(file_path, DURATION_QUERY)
