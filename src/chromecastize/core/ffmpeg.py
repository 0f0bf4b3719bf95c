"""FFmpeg integration: the transcoder behind the conversion step."""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from ..config.constants import CONVERT_REALTIME_FACTOR, MIN_CONVERT_TIMEOUT_SECONDS
from .base import ConversionFailure, ToolUnavailable

LOG = logging.getLogger(__name__)

FFMPEG = "ffmpeg"


class FFmpegError(ConversionFailure):
    """FFmpeg-specific error."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        return_code: int | None = None,
        stderr: str | None = None,
        file_path: Path | None = None,
    ) -> None:
        """Initialize FFmpeg error with detailed context."""
        super().__init__(message, file_path=file_path)
        self.command = command
        self.return_code = return_code
        self.stderr = stderr


def output_path_for(input_file: Path, container: str) -> Path:
    """Conversions are written next to the source as `<name>.<ext>.<container>`."""
    return input_file.with_name(f"{input_file.name}.{container}")


def timeout_for_duration(duration_ms: str) -> int:
    """Allow several times realtime for an encode, never less than the minimum."""
    try:
        seconds = float(duration_ms) / 1000
    except ValueError:
        return MIN_CONVERT_TIMEOUT_SECONDS
    return max(MIN_CONVERT_TIMEOUT_SECONDS, int(seconds * CONVERT_REALTIME_FACTOR))


class FFmpegProcessor:
    """FFmpeg command executor with enhanced error handling."""

    def __init__(self, timeout: int = MIN_CONVERT_TIMEOUT_SECONDS) -> None:
        """Initialize FFmpeg processor with timeout."""
        self.timeout = timeout

    @staticmethod
    def check_availability() -> None:
        """Fail fast if ffmpeg is not installed."""
        if not shutil.which(FFMPEG):
            LOG.error("Missing executable: %s", FFMPEG)
            raise ToolUnavailable(FFMPEG)

    def build_convert_command(
        self,
        input_file: Path,
        output_file: Path,
        video_codec: str,
        audio_codec: str,
    ) -> list[str]:
        """Build the FFmpeg command; all streams are mapped and subtitles copied."""
        return [
            FFMPEG,
            "-y",
            "-loglevel",
            "error",
            "-stats",
            "-i",
            str(input_file),
            "-map",
            "0",
            "-c:s",
            "copy",
            "-c:v",
            video_codec,
            "-c:a",
            audio_codec,
            str(output_file),
        ]

    def run_command(self, command: list[str], file_path: Path | None = None) -> subprocess.CompletedProcess:
        """Run FFmpeg command with proper error handling."""
        LOG.debug("Running FFmpeg command: %s", " ".join(command))
        start_time = time.time()

        try:
            result = subprocess.run(  # noqa: S603
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,  # We'll handle return code ourselves
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.TimeoutExpired as e:
            msg = f"FFmpeg command timed out after {self.timeout}s"
            raise FFmpegError(msg, command=command, file_path=file_path) from e
        except OSError as e:
            msg = f"Unexpected error running FFmpeg: {e}"
            raise FFmpegError(msg, command=command, file_path=file_path) from e

        LOG.debug("FFmpeg command completed in %.2fs", time.time() - start_time)
        if result.returncode != 0:
            self._handle_ffmpeg_error(result, command, file_path)
        return result

    def _handle_ffmpeg_error(
        self, result: subprocess.CompletedProcess, command: list[str], file_path: Path | None
    ) -> None:
        """Handle FFmpeg command error by raising appropriate exception."""
        error_msg = f"FFmpeg failed with return code {result.returncode}"
        if result.stderr:
            error_msg += f": {result.stderr.strip()}"

        raise FFmpegError(
            error_msg,
            command=command,
            return_code=result.returncode,
            stderr=result.stderr,
            file_path=file_path,
        )

    def convert(  # noqa: PLR0913
        self,
        input_file: Path,
        video_codec: str,
        audio_codec: str,
        container: str,
        duration_ms: str = "",
    ) -> Path:
        """Transcode into `<input>.<container>` and return the output path."""
        output_file = output_path_for(input_file, container)
        command = self.build_convert_command(input_file, output_file, video_codec, audio_codec)

        original_timeout = self.timeout
        self.timeout = max(original_timeout, timeout_for_duration(duration_ms))
        try:
            self.run_command(command, input_file)
        finally:
            self.timeout = original_timeout

        if not output_file.exists():
            msg = f"Output file not created: {output_file}"
            raise ConversionFailure(msg, file_path=input_file)
        return output_file
