"""Tests for the mediainfo probe adapter."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from chromecastize.core import MediaInfoProbe, ProbeError, ProbeResult, ToolUnavailable
from chromecastize.core.mediainfo import format_duration


def _completed(stdout: str, returncode: int = 0) -> Mock:
    return Mock(stdout=stdout, stderr="", returncode=returncode)


def test_check_availability_missing() -> None:
    with patch("chromecastize.core.mediainfo.shutil.which", return_value=None):
        with pytest.raises(ToolUnavailable) as exc_info:
            MediaInfoProbe.check_availability()

    assert exc_info.value.tool == "mediainfo"


def test_check_availability_present() -> None:
    with patch("chromecastize.core.mediainfo.shutil.which", return_value="/usr/bin/mediainfo"):
        MediaInfoProbe.check_availability()


def test_query_returns_first_line() -> None:
    """Files with several audio tracks report one line per track; the first wins."""
    with patch("chromecastize.core.mediainfo.subprocess.run", return_value=_completed("AAC\nAC-3\n")) as mock_run:
        label = MediaInfoProbe().query(Path("movie.mkv"), "Audio;%Format%\\n")

    assert label == "AAC"
    cmd = mock_run.call_args.args[0]
    assert cmd == ["mediainfo", "--Inform=Audio;%Format%\\n", "movie.mkv"]


def test_query_empty_output() -> None:
    with patch("chromecastize.core.mediainfo.subprocess.run", return_value=_completed("")):
        assert MediaInfoProbe().query(Path("movie.mkv"), "Video;%Format%\\n") == ""


def test_probe_reads_three_labels() -> None:
    outputs = {
        "--Inform=General;%Format%\\n": "Matroska\n",
        "--Inform=Video;%Format%\\n": "AVC\n",
        "--Inform=Audio;%Format%\\n": "DTS\n",
    }

    def _run(cmd: list[str], **_kwargs: object) -> Mock:
        return _completed(outputs[cmd[1]])

    with patch("chromecastize.core.mediainfo.subprocess.run", side_effect=_run) as mock_run:
        result = MediaInfoProbe().probe(Path("movie.mkv"))

    assert result == ProbeResult("Matroska", "AVC", "DTS")
    assert mock_run.call_count == 3


def test_get_duration() -> None:
    with patch("chromecastize.core.mediainfo.subprocess.run", return_value=_completed("5025678\n")) as mock_run:
        duration = MediaInfoProbe().get_duration(Path("movie.mkv"))

    assert duration == "5025678"
    assert mock_run.call_args.args[0][1] == "--Inform=General;%Duration%"


def test_timeout_raises_probe_error() -> None:
    probe = MediaInfoProbe(timeout=5)
    with patch(
        "chromecastize.core.mediainfo.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd=["mediainfo"], timeout=5),
    ):
        with pytest.raises(ProbeError, match="timed out"):
            probe.probe(Path("movie.mkv"))


def test_format_duration() -> None:
    assert format_duration("5025678") == "01:23:45.678"
    assert format_duration("1500.25") == "00:00:01.500"
    assert format_duration("") == ""
