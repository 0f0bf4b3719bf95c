"""End-of-run summary display."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core import ProcessingStatus

if TYPE_CHECKING:
    from ..core import ProcessingResult

# Constants for table formatting
MAX_FILENAME_LENGTH = 37
FILENAME_TRUNCATE_LENGTH = 34
MAX_ERROR_MSG_LENGTH = 32
ERROR_MSG_TRUNCATE_LENGTH = 29

STATUS_LABELS = {
    ProcessingStatus.COMPATIBLE: "Already playable",
    ProcessingStatus.CONVERTED: "Converted",
    ProcessingStatus.NEEDS_CONVERSION: "Need conversion",
    ProcessingStatus.SKIPPED: "Skipped",
    ProcessingStatus.FAILED: "Failed",
    ProcessingStatus.ERROR: "Errors",
}


def _truncate(text: str, limit: int, keep: int) -> str:
    return text[:keep] + "..." if len(text) > limit else text


def print_summary_table(results: list[ProcessingResult]) -> None:
    """
    Print per-status counts, then a table of files that did not make it.

    Args:
        results: Every ProcessingResult of the run, in processing order

    """
    if not results:
        return

    print("\n" + "=" * 80)
    print(f"{'SUMMARY':^80}")
    print("=" * 80)
    for status, label in STATUS_LABELS.items():
        count = sum(1 for r in results if r.status is status)
        if count:
            print(f"{label:<20} {count:>6}")

    pending = [r for r in results if r.status is ProcessingStatus.NEEDS_CONVERSION]
    if pending:
        print("\nFiles that should be chromecastized:")
        for result in pending:
            print(f"  {result.source_file}")

    failed = [r for r in results if r.status in (ProcessingStatus.FAILED, ProcessingStatus.ERROR)]
    if not failed:
        return

    print(f"\n{'FILE':<40} | {'ERROR':<35}")
    print("-" * 80)
    for result in failed:
        filename = _truncate(result.source_file.name, MAX_FILENAME_LENGTH, FILENAME_TRUNCATE_LENGTH)
        error_msg = _truncate(result.message or "Unknown error", MAX_ERROR_MSG_LENGTH, ERROR_MSG_TRUNCATE_LENGTH)
        print(f"{filename:<40} | {error_msg:<35}")

    print("\nFailed files were left untouched and will be retried on the next run.\n")
