"""Shared fixtures: isolated config home, fake probe and fake transcoder."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from chromecastize.config.settings import ChromecastizeConfig, GlobalConfig
from chromecastize.core import FFmpegProcessor, MediaInfoProbe, ProbeResult, ProcessedFileLedger
from chromecastize.core.ffmpeg import output_path_for
from chromecastize.processors import ChromecastProcessor


@pytest.fixture
def config(tmp_path: Path) -> ChromecastizeConfig:
    """Config whose ledger lives under the test's temporary directory."""
    return ChromecastizeConfig(global_=GlobalConfig(home=tmp_path / "home", progress=False))


@pytest.fixture
def ledger(config: ChromecastizeConfig) -> ProcessedFileLedger:
    ledger = ProcessedFileLedger(config.global_.ledger_path)
    ledger.ensure_exists()
    return ledger


@pytest.fixture
def videos(tmp_path: Path) -> Path:
    """Directory for fake video files."""
    directory = tmp_path / "videos"
    directory.mkdir()
    return directory


@pytest.fixture
def fake_probe() -> Mock:
    """Probe returning a compatible file unless a test changes it."""
    probe = Mock(spec=MediaInfoProbe)
    probe.probe.return_value = ProbeResult("MPEG-4", "AVC", "AAC")
    probe.get_duration.return_value = "60000"
    return probe


@pytest.fixture
def fake_converter() -> Mock:
    """Transcoder that writes the output file and reports success."""

    def _convert(input_file: Path, _video: str, _audio: str, container: str, _duration: str = "") -> Path:
        output = output_path_for(input_file, container)
        output.write_bytes(b"converted")
        return output

    converter = Mock(spec=FFmpegProcessor)
    converter.convert.side_effect = _convert
    return converter


@pytest.fixture
def processor(
    config: ChromecastizeConfig, ledger: ProcessedFileLedger, fake_probe: Mock, fake_converter: Mock
) -> ChromecastProcessor:
    return ChromecastProcessor(config, probe=fake_probe, converter=fake_converter, ledger=ledger)
