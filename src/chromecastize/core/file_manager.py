"""File bookkeeping around a conversion: keep the source, drop partial output."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .base import ProcessingError

if TYPE_CHECKING:
    from pathlib import Path

LOG = logging.getLogger(__name__)


@dataclass
class FileOperation:
    """A file operation performed during this session."""

    operation_type: str
    source_path: Path
    target_path: Path | None = None
    success: bool = False
    timestamp: float = 0.0

    def __post_init__(self) -> None:
        """Set timestamp if not provided."""
        if self.timestamp == 0.0:
            self.timestamp = time.time()


class FileManager:
    """Renames converted sources to a backup name and removes failed outputs."""

    def __init__(self, backup_suffix: str = ".bak") -> None:
        """Initialize file manager with the suffix appended to converted sources."""
        self.backup_suffix = backup_suffix
        self.session_operations: list[FileOperation] = []

    def backup_path_for(self, file_path: Path) -> Path:
        return file_path.with_name(file_path.name + self.backup_suffix)

    def backup_original(self, file_path: Path) -> Path:
        """Rename the source out of the way; it is never deleted."""
        backup_path = self.backup_path_for(file_path)
        try:
            file_path.rename(backup_path)
        except OSError as e:
            self.session_operations.append(FileOperation("backup_rename", file_path, backup_path, success=False))
            msg = f"Could not rename {file_path} to {backup_path}: {e}"
            raise ProcessingError(msg, file_path=file_path, cause=e) from e

        self.session_operations.append(FileOperation("backup_rename", file_path, backup_path, success=True))
        LOG.info("- renaming original file as '%s'", backup_path)
        return backup_path

    def discard_partial(self, output_path: Path) -> bool:
        """Delete a partially written output. Returns True if something was removed."""
        if not output_path.exists():
            return False
        try:
            output_path.unlink()
        except OSError as e:
            LOG.warning("Failed to delete partial output %s: %s", output_path, e)
            self.session_operations.append(FileOperation("discard_partial", output_path, success=False))
            return False

        self.session_operations.append(FileOperation("discard_partial", output_path, success=True))
        LOG.info("- deleted partially converted file '%s'", output_path)
        return True

    def get_session_summary(self) -> dict[str, Any]:
        """Get summary of file operations in this session."""
        successful_ops = [op for op in self.session_operations if op.success]
        failed_ops = [op for op in self.session_operations if not op.success]

        return {
            "total_operations": len(self.session_operations),
            "successful_operations": len(successful_ops),
            "failed_operations": len(failed_ops),
            "backups_created": sum(1 for op in successful_ops if op.operation_type == "backup_rename"),
            "partials_removed": sum(1 for op in successful_ops if op.operation_type == "discard_partial"),
            "operations": self.session_operations,
        }
