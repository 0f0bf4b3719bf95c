"""Per-file pipeline: probe, classify, then mark as good or convert."""

from __future__ import annotations

import time
from dataclasses import replace
from typing import TYPE_CHECKING, Any

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from ..core import (
    CapabilityRegistry,
    ConversionFailure,
    FFmpegProcessor,
    FileManager,
    MediaInfoProbe,
    MediaProcessor,
    ProbeError,
    ProcessedFileLedger,
    ProcessingError,
    ProcessingResult,
    ProcessingStatus,
)
from ..core.classifier import decide, file_extension, precheck
from ..core.ffmpeg import output_path_for
from ..core.mediainfo import format_duration

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from ..config import ChromecastizeConfig
    from ..core import SkipReason
    from ..core.classifier import FileDecision
    from ..core.walker import ProcessingUnit


class ChromecastProcessor(MediaProcessor):
    """Makes video files playable on a Chromecast, one file at a time."""

    def __init__(  # noqa: PLR0913
        self,
        config: ChromecastizeConfig,
        *,
        probe: MediaInfoProbe | None = None,
        converter: FFmpegProcessor | None = None,
        ledger: ProcessedFileLedger | None = None,
        file_manager: FileManager | None = None,
    ) -> None:
        """Initialize the processor; collaborators default to the real tools."""
        super().__init__("ChromecastProcessor")
        self.config = config
        self.registry = CapabilityRegistry.from_config(config.registry)
        self.extensions = frozenset(ext.lower() for ext in config.extensions)
        self.probe = probe if probe is not None else MediaInfoProbe(timeout=config.global_.probe_timeout)
        self.converter = converter if converter is not None else FFmpegProcessor()
        self.ledger = ledger if ledger is not None else ProcessedFileLedger(config.global_.ledger_path)
        self.file_manager = file_manager if file_manager is not None else FileManager(config.global_.backup_suffix)

    def check_tools(self) -> None:
        """Verify external tools once, before any file is touched."""
        self.probe.check_availability()
        if not self.config.global_.check_only:
            self.converter.check_availability()

    def prepare(self) -> None:
        """Create the ledger if this is the first run."""
        self.ledger.ensure_exists()

    def can_process(self, file_path: Path) -> bool:
        """Check if the file has a video extension."""
        return file_extension(file_path).lower() in self.extensions

    def skip_reason(self, file_path: Path) -> SkipReason | None:
        """Why a file is skipped before probing, or None when it needs a look."""
        return precheck(file_path, self.extensions, self.ledger)

    def should_process(self, file_path: Path) -> bool:
        """Check the file is neither a non-video file nor already in the ledger."""
        return self.skip_reason(file_path) is None

    def process_file(self, file_path: Path, **kwargs: Any) -> ProcessingResult:
        """
        Classify one file and act on the verdict.

        ConfigurationGap is not caught here; an unknown label stops the run.
        """
        override = kwargs.get("override")
        start_time = time.time()
        self.logger.info("===========")
        self.logger.info("Processing: %s", file_path)

        skip_reason = self.skip_reason(file_path)
        if skip_reason is not None:
            self.logger.info("- %s, skipping", skip_reason.value)
            return ProcessingResult(
                source_file=file_path,
                status=ProcessingStatus.SKIPPED,
                message=skip_reason.value,
                skip_reason=skip_reason,
            )

        try:
            probe_result = self.probe.probe(file_path)
        except ProbeError as e:
            self.logger.error("- %s", e)
            return ProcessingResult(
                source_file=file_path,
                status=ProcessingStatus.ERROR,
                message=str(e),
                processing_time=time.time() - start_time,
            )

        decision = decide(
            file_path,
            file_extension(file_path),
            probe_result,
            override,
            self.registry,
            self.config.defaults,
        )
        metadata: dict[str, Any] = {"decision": decision, "override": override, "probe": probe_result}

        if decision.is_compatible:
            self.logger.info("- file should be playable by Chromecast!")
            self.ledger.record(file_path)
            return ProcessingResult(
                source_file=file_path,
                status=ProcessingStatus.COMPATIBLE,
                message="already Chromecast-ready",
                processing_time=time.time() - start_time,
                metadata=metadata,
            )

        duration_ms = self._probe_duration(file_path)
        metadata["probe"] = replace(probe_result, duration=duration_ms)
        self.logger.info("- video length: %s", format_duration(duration_ms) or "unknown")

        if self.config.global_.check_only:
            self.logger.info("- file should be *chromecastized*!")
            return ProcessingResult(
                source_file=file_path,
                status=ProcessingStatus.NEEDS_CONVERSION,
                message=(
                    f"needs conversion to {decision.output_container} "
                    f"(video {decision.output_video_codec}, audio {decision.output_audio_codec})"
                ),
                processing_time=time.time() - start_time,
                metadata=metadata,
            )

        result = self.convert(file_path, decision, duration_ms)
        result.processing_time = time.time() - start_time
        result.metadata.update(metadata)
        return result

    def _probe_duration(self, file_path: Path) -> str:
        try:
            return self.probe.get_duration(file_path)
        except ProbeError as e:
            self.logger.warning("- could not read duration: %s", e)
            return ""

    def convert(self, file_path: Path, decision: FileDecision, duration_ms: str = "") -> ProcessingResult:
        """
        Run the transcoder and do the success/failure bookkeeping.

        Success records the output in the ledger and renames the source to
        its backup name. Failure, including an interrupt, removes any partial
        output and leaves the source untouched and unrecorded.
        """
        output_file = output_path_for(file_path, decision.output_container)
        try:
            output_file = self.converter.convert(
                file_path,
                decision.output_video_codec,
                decision.output_audio_codec,
                decision.output_container,
                duration_ms,
            )
        except ConversionFailure as e:
            self.logger.error("- failed to convert '%s': %s", file_path, e)
            self.file_manager.discard_partial(output_file)
            return ProcessingResult(
                source_file=file_path,
                status=ProcessingStatus.FAILED,
                message=str(e),
                metadata={"output_file": output_file},
            )
        except KeyboardInterrupt:
            self.logger.error("- conversion of '%s' has been interrupted", file_path)
            self.file_manager.discard_partial(output_file)
            raise

        self.logger.info("- conversion succeeded; file '%s' saved", output_file)
        self.ledger.record(output_file)
        try:
            backup_path = self.file_manager.backup_original(file_path)
        except ProcessingError as e:
            self.logger.error("- %s", e)
            return ProcessingResult(
                source_file=file_path,
                status=ProcessingStatus.ERROR,
                message=str(e),
                output_file=output_file,
            )

        return ProcessingResult(
            source_file=file_path,
            status=ProcessingStatus.CONVERTED,
            message=f"converted to {output_file.name}",
            output_file=output_file,
            metadata={"backup_file": backup_path},
        )

    def process_units(self, units: Iterable[ProcessingUnit]) -> list[ProcessingResult]:
        """Process units strictly in order, one file at a time."""
        results: list[ProcessingResult] = []
        progress_bar = tqdm(
            units,
            desc="Processing videos",
            unit="file",
            disable=not self.config.global_.progress,
        )

        try:
            with logging_redirect_tqdm():
                for unit in progress_bar:
                    progress_bar.set_postfix_str(unit.path.name)
                    if unit.skip_reason is not None:
                        results.append(
                            ProcessingResult(
                                source_file=unit.path,
                                status=ProcessingStatus.SKIPPED,
                                message=unit.skip_reason.value,
                                skip_reason=unit.skip_reason,
                            )
                        )
                        continue
                    results.append(self.process_file(unit.path, override=unit.override))
        finally:
            progress_bar.close()
            self._log_summary(results)

        return results

    def _log_summary(self, results: list[ProcessingResult]) -> None:
        counts = {status: 0 for status in ProcessingStatus}
        for result in results:
            counts[result.status] += 1
        summary = self.file_manager.get_session_summary()
        self.logger.info(
            "Processing complete: %d compatible, %d converted, %d to convert, %d skipped, %d failed, %d errors "
            "(%d originals renamed)",
            counts[ProcessingStatus.COMPATIBLE],
            counts[ProcessingStatus.CONVERTED],
            counts[ProcessingStatus.NEEDS_CONVERSION],
            counts[ProcessingStatus.SKIPPED],
            counts[ProcessingStatus.FAILED],
            counts[ProcessingStatus.ERROR],
            summary["backups_created"],
        )
