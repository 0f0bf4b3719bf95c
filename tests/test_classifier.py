"""Tests for the classification engine."""

from pathlib import Path

import pytest

from chromecastize.config.settings import ConversionDefaults, RegistryConfig
from chromecastize.core import (
    CapabilityRegistry,
    ConfigurationGap,
    ProbeResult,
    ProcessedFileLedger,
    SkipReason,
    decide,
    precheck,
)
from chromecastize.core.classifier import file_extension


@pytest.fixture
def registry() -> CapabilityRegistry:
    return CapabilityRegistry.from_config(RegistryConfig())


@pytest.fixture
def defaults() -> ConversionDefaults:
    return ConversionDefaults()


def _decide(name: str, probe_result: ProbeResult, override: str | None, registry, defaults):
    path = Path("/videos") / name
    return decide(path, file_extension(path), probe_result, override, registry, defaults)


def test_all_supported_is_compatible(registry: CapabilityRegistry, defaults: ConversionDefaults) -> None:
    decision = _decide("movie.mp4", ProbeResult("MPEG-4", "AVC", "AAC"), None, registry, defaults)

    assert decision.output_container == "ok"
    assert decision.output_video_codec == "copy"
    assert decision.output_audio_codec == "copy"
    assert decision.is_compatible


def test_unsupported_video_keeps_current_container(
    registry: CapabilityRegistry, defaults: ConversionDefaults
) -> None:
    """The "ok" container becomes the current extension once a conversion is needed."""
    decision = _decide("movie.mp4", ProbeResult("MPEG-4", "HEVC", "AAC"), None, registry, defaults)

    assert not decision.is_compatible
    assert decision.output_video_codec == "h264"
    assert decision.output_audio_codec == "copy"
    assert decision.output_container == "mp4"
    assert decision.input_video_codec == "HEVC"


def test_unsupported_audio_uses_default_encoder(registry: CapabilityRegistry, defaults: ConversionDefaults) -> None:
    decision = _decide("movie.mkv", ProbeResult("Matroska", "AVC", "DTS"), None, registry, defaults)

    assert decision.output_audio_codec == "libvorbis"
    assert decision.output_video_codec == "copy"
    assert decision.output_container == "mkv"


def test_unsupported_container_uses_default(registry: CapabilityRegistry, defaults: ConversionDefaults) -> None:
    decision = _decide("movie.avi", ProbeResult("AVI", "AVC", "AAC"), None, registry, defaults)

    assert decision.output_container == "mkv"
    assert decision.output_video_codec == "copy"
    assert not decision.is_compatible


def test_override_forces_container_even_when_supported(
    registry: CapabilityRegistry, defaults: ConversionDefaults
) -> None:
    decision = _decide("movie.avi", ProbeResult("Matroska", "AVC", "AAC"), "mkv", registry, defaults)

    assert decision.output_container == "mkv"
    assert not decision.is_compatible


def test_override_matching_extension_is_passthrough(
    registry: CapabilityRegistry, defaults: ConversionDefaults
) -> None:
    decision = _decide("movie.mp4", ProbeResult("MPEG-4", "AVC", "AAC"), "mp4", registry, defaults)

    assert decision.output_container == "ok"
    assert decision.is_compatible


def test_override_match_is_case_sensitive(registry: CapabilityRegistry, defaults: ConversionDefaults) -> None:
    decision = _decide("MOVIE.MP4", ProbeResult("MPEG-4", "AVC", "AAC"), "mp4", registry, defaults)

    assert decision.output_container == "mp4"
    assert not decision.is_compatible


def test_override_differs_from_supported_container(
    registry: CapabilityRegistry, defaults: ConversionDefaults
) -> None:
    decision = _decide("movie.mkv", ProbeResult("Matroska", "AVC", "AAC"), "mp4", registry, defaults)

    assert decision.output_container == "mp4"


def test_custom_defaults(registry: CapabilityRegistry) -> None:
    defaults = ConversionDefaults(video_codec="libx264", audio_codec="aac", container="mp4")

    decision = _decide("movie.avi", ProbeResult("AVI", "xvid", "AC-3"), None, registry, defaults)

    assert (decision.output_container, decision.output_video_codec, decision.output_audio_codec) == (
        "mp4",
        "libx264",
        "aac",
    )


@pytest.mark.parametrize(
    "probe_result",
    [
        ProbeResult("QuickTime", "AVC", "AAC"),
        ProbeResult("MPEG-4", "VP9", "AAC"),
        ProbeResult("MPEG-4", "AVC", ""),
    ],
)
def test_unknown_label_aborts(
    registry: CapabilityRegistry, defaults: ConversionDefaults, probe_result: ProbeResult
) -> None:
    with pytest.raises(ConfigurationGap):
        _decide("movie.mp4", probe_result, None, registry, defaults)


def test_unknown_container_aborts_despite_override_match(
    registry: CapabilityRegistry, defaults: ConversionDefaults
) -> None:
    with pytest.raises(ConfigurationGap):
        _decide("movie.mp4", ProbeResult("QuickTime", "AVC", "AAC"), "mp4", registry, defaults)


def test_file_extension() -> None:
    assert file_extension(Path("a/b/movie.final.MKV")) == "MKV"
    assert file_extension(Path("README")) == "README"


def test_precheck(tmp_path: Path) -> None:
    """Non-video extensions are skipped first, then ledger hits."""
    ledger = ProcessedFileLedger(tmp_path / "processed_files")
    extensions = {"mkv", "mp4"}
    done = tmp_path / "done.mkv"
    ledger.record(done)

    assert precheck(tmp_path / "notes.txt", extensions, ledger) is SkipReason.NOT_VIDEO
    assert precheck(done, extensions, ledger) is SkipReason.ALREADY_PROCESSED
    assert precheck(tmp_path / "NEW.MP4", extensions, ledger) is None
